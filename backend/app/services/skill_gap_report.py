"""
Skill gap report — turns a candidate's skill gap analysis into a paginated
card document and, from there, into a PDF.

Report structure (A4, millimetres; every row is 190mm wide):

  Overview
    CANDIDATE PROFILE (90×40)   | TEST SUMMARY (95×40)
    PERFORMANCE | SKILL GAPS | STRENGTHS | TIME SPENT   (4 stat cards, 30 tall)
    PERFORMANCE ANALYSIS (90×35) | KEY INSIGHTS (95×35)
    CRITICAL SKILL GAPS (full width, auto height)
    STRENGTH AREAS (full width, auto height)
  Detailed analysis
    COMPREHENSIVE TRAINING PLAN (full width, auto height)
    INDUSTRY ANALYSIS (90×50)   | PREDICTIVE ANALYTICS (95×50)
    AI-POWERED INSIGHTS (full width, auto height)
    SECURITY ASSESSMENT (full width, only when proctoring data exists)

Grid cards have fixed heights so rows line up; anything that doesn't fit
is clipped by the card. List cards grow with their content instead.

Missing analysis blocks fall back to neutral defaults ("N/A", "Standard",
generic recommendations) so a partially-analysed result still produces a
complete report.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.config import settings
from app.layout import (
    AUTO,
    BulletList,
    CardGeometry,
    CardLayout,
    CardSpec,
    KeyValue,
    Label,
    Page,
    PageDecoration,
    PageMetrics,
    ReportDocument,
    ReportLabMeasurer,
    ReportPaginator,
    Row,
    Section,
)
from app.schemas.reports import SkillGapReport
from app.services.pdf_renderer import PDFRenderer, report_filename

FULL_WIDTH = 190
LEFT_WIDTH = 90
RIGHT_WIDTH = 95
COLUMN_GAP = 5

DEFAULT_TRAINING = [
    "Focus on hands-on practice with real-world projects",
    "Strengthen domain-specific knowledge",
    "Engage in collaborative learning opportunities",
]


def _or(value, fallback):
    """value unless it's None or an empty string."""
    if value is None or value == "":
        return fallback
    return value


def _number(value) -> str:
    """12.0 → "12", 12.5 → "12.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _duration(seconds: int) -> str:
    return f"{seconds // 60}m {seconds % 60}s"


def _strip_question_prefix(gap: str) -> str:
    """Skill gaps come back as "Question 3 - Topic"; keep the topic."""
    head, sep, tail = gap.partition(" - ")
    if sep and head.startswith("Question "):
        return tail
    return gap


class SkillGapReportBuilder:
    """Builds the ReportDocument for one SkillGapReport.

    Usage:
        document = SkillGapReportBuilder().build(report)
    """

    def __init__(self, title: Optional[str] = None):
        self.title = title or settings.REPORT_BRAND_NAME

    def build(self, report: SkillGapReport) -> ReportDocument:
        return ReportDocument(
            sections=[self._overview(report), self._detail(report)],
            title=self.title,
            subtitle=f"{report.candidate_info.name} - {report.test_info.title}",
        )

    # ------------------------------------------------------------------
    # SECTIONS
    # ------------------------------------------------------------------

    def _overview(self, report: SkillGapReport) -> Section:
        info = report.candidate_info
        test = report.test_info
        metrics = report.performance_metrics
        accuracy = _number(_or(metrics.accuracy, metrics.percentage))
        total_questions = metrics.total_questions or test.total_questions
        assessed = report.generated_at.strftime("%Y-%m-%d") if report.generated_at else "N/A"
        insights = report.ai_insights

        profile = CardSpec("CANDIDATE PROFILE", [
            KeyValue("Name", _or(info.name, "N/A")),
            KeyValue("ID", report.candidate_id),
            KeyValue("Email", _or(info.email, "N/A")),
            KeyValue("Overall Score", f"{_number(metrics.percentage)}%"),
            KeyValue("Assessment Date", assessed),
        ], width=LEFT_WIDTH, height=40)

        summary = CardSpec("TEST SUMMARY", [
            KeyValue("Test Title", test.title),
            KeyValue("Domain", test.domain),
            KeyValue("Level", test.level),
            KeyValue("Questions", f"{_number(metrics.score)}/{total_questions}"),
            KeyValue("Accuracy", f"{accuracy}%"),
        ], width=RIGHT_WIDTH, height=40)

        gaps = report.skill_gaps
        strengths = report.strength_areas
        stats = Row([
            CardSpec("PERFORMANCE", [
                Label(f"{accuracy}%"),
                Label("Above Average" if float(accuracy) >= 70 else "Needs Improvement"),
            ], width=47, height=30),
            CardSpec("SKILL GAPS", [
                KeyValue("Count", str(len(gaps))),
                Label("Gaps Identified" if gaps else "No Major Gaps"),
            ], width=47, height=30),
            CardSpec("STRENGTHS", [
                KeyValue("Count", str(len(strengths))),
                Label("Strengths Found" if strengths else "Developing"),
            ], width=47, height=30),
            CardSpec("TIME SPENT", [
                Label(_duration(metrics.time_spent)),
                Label("Total Time"),
            ], width=43, height=30),
        ], gap=2)

        analysis = CardSpec("PERFORMANCE ANALYSIS", [
            KeyValue("Questions Answered", _number(metrics.questions_answered or metrics.score)),
            KeyValue("Total Questions", str(total_questions)),
            KeyValue("Accuracy Rate", f"{accuracy}%"),
            KeyValue("Completion Rate", "100%"),
            KeyValue("Speed Rating", _or(metrics.speed, "Standard")),
        ], width=LEFT_WIDTH, height=35)

        key_insights = CardSpec("KEY INSIGHTS", [
            KeyValue("Growth Potential",
                     f"{_number(insights.growth_potential)}/10"
                     if insights and insights.growth_potential is not None else "N/A"),
            KeyValue("Market Position",
                     _or(insights and insights.market_position, "Developing skills")),
            KeyValue("Top Strength",
                     _or(insights and insights.top_strength, "Consistent performance")),
            KeyValue("Assessment",
                     _or(insights and insights.overall_assessment, "Positive trajectory")),
        ], width=RIGHT_WIDTH, height=35)

        return Section([
            Row([profile, summary], gap=COLUMN_GAP),
            stats,
            Row([analysis, key_insights], gap=COLUMN_GAP),
            self._skill_gaps_card(gaps),
            self._strengths_card(strengths, insights.top_strength if insights else None),
        ])

    def _detail(self, report: SkillGapReport) -> Section:
        blocks = [
            self._training_card(report),
            Row([self._industry_card(report), self._predictive_card(report)], gap=COLUMN_GAP),
            self._ai_insights_card(report),
        ]
        if report.security_metrics is not None:
            blocks.append(self._security_card(report))
        return Section(blocks)

    # ------------------------------------------------------------------
    # CARDS
    # ------------------------------------------------------------------

    def _skill_gaps_card(self, gaps: list[str]) -> CardSpec:
        if gaps:
            fields = [
                Label("Identified Critical Skill Gaps:"),
                BulletList([_strip_question_prefix(gap) for gap in gaps], style="numbered"),
                Label(""),
                Label("Impact Assessment:"),
                BulletList([
                    "These gaps indicate areas requiring immediate attention",
                    "Focus on practical implementation and hands-on practice",
                ]),
            ]
        else:
            fields = [
                Label("No critical skill gaps identified"),
                Label("Candidate demonstrates solid foundational knowledge"),
            ]
        return CardSpec("CRITICAL SKILL GAPS", fields, width=FULL_WIDTH, height=AUTO)

    def _strengths_card(self, strengths: list[str], top_strength: Optional[str]) -> CardSpec:
        if strengths:
            fields = [
                Label("Identified Strength Areas:"),
                BulletList(strengths, style="numbered"),
            ]
        else:
            fields = [
                Label("Foundation Level Strengths:"),
                BulletList([
                    "Basic understanding of core concepts",
                    "Willingness to learn and improve",
                    "Consistent effort throughout assessment",
                ]),
            ]
        if top_strength:
            fields += [Label(""), Label("Key Strength:"), BulletList([top_strength])]
        return CardSpec("STRENGTH AREAS", fields, width=FULL_WIDTH, height=AUTO)

    def _training_card(self, report: SkillGapReport) -> CardSpec:
        plan = report.training_recommendations
        insights = report.ai_insights
        fields = []

        if plan:
            for heading, items in (
                ("IMMEDIATE PRIORITY (Week 1-2):", plan.immediate),
                ("SHORT TERM (1-3 months):", plan.short_term),
                ("LONG TERM (3-6 months):", plan.long_term),
            ):
                if items:
                    if fields:
                        fields.append(Label(""))
                    fields += [Label(heading), BulletList(items)]

        if not fields:
            recommendations = (insights.recommendations if insights else None) or DEFAULT_TRAINING
            fields = [Label("IMMEDIATE FOCUS AREAS:"), BulletList(recommendations)]

        if plan and plan.suggested_courses:
            fields += [Label(""), Label("SUGGESTED COURSES:"), BulletList(plan.suggested_courses)]

        if insights and insights.improvement_areas:
            fields += [
                Label(""),
                Label("KEY IMPROVEMENT AREAS:"),
                BulletList(insights.improvement_areas[:3]),
            ]

        return CardSpec("COMPREHENSIVE TRAINING PLAN", fields, width=FULL_WIDTH, height=AUTO)

    def _industry_card(self, report: SkillGapReport) -> CardSpec:
        industry = report.industry_analysis
        if industry is None:
            fields = [
                KeyValue("Market Demand", "Moderate to High"),
                KeyValue("Salary Range", "N/A"),
                KeyValue("Industry Percentile", "N/A"),
                KeyValue("Competition Level", "Moderate"),
            ]
        else:
            skills_match = industry.skills_match
            if isinstance(skills_match, (int, float)):
                skills_match = f"{_number(skills_match)}%"
            fields = [
                KeyValue("Market Demand", _or(industry.market_demand, "Moderate")),
                KeyValue("Salary Range", _or(industry.salary_range, "N/A")),
                KeyValue("Industry Percentile", _or(industry.industry_percentile, "N/A")),
                KeyValue("Skills Match", _or(skills_match, "N/A")),
                KeyValue("Competition Level", _or(industry.competition_level, "Moderate")),
            ]
            if industry.suitable_roles:
                fields += [Label("Suitable Roles:"), BulletList(industry.suitable_roles)]
        return CardSpec("INDUSTRY ANALYSIS", fields, width=LEFT_WIDTH, height=50)

    def _predictive_card(self, report: SkillGapReport) -> CardSpec:
        predictive = report.predictive_analytics
        if predictive is None:
            fields = [
                KeyValue("Future Performance", "N/A"),
                KeyValue("Promotion Readiness", "N/A"),
                KeyValue("Learning Curve", "Moderate"),
                KeyValue("Time to Improve", "3-6 months"),
            ]
        else:
            def pct(value):
                return f"{_number(value)}%" if value is not None else "N/A"

            fields = [
                KeyValue("Future Performance", pct(predictive.future_performance)),
                KeyValue("Promotion Readiness", pct(predictive.promotion_readiness)),
                KeyValue("Career Track", _or(predictive.career_track, "N/A")),
                KeyValue("Learning Curve", _or(predictive.learning_curve, "Moderate")),
                KeyValue("Time to Improve", _or(predictive.estimated_time_to_improve, "3-6 months")),
            ]
        return CardSpec("PREDICTIVE ANALYTICS", fields, width=RIGHT_WIDTH, height=50)

    def _ai_insights_card(self, report: SkillGapReport) -> CardSpec:
        insights = report.ai_insights
        if insights is None:
            fields = [
                KeyValue("Overall Assessment", "Candidate shows potential for growth"),
                KeyValue("Growth Potential", "N/A"),
            ]
        else:
            growth = insights.growth_potential
            fields = [
                KeyValue("Overall Assessment",
                         _or(insights.overall_assessment, "Candidate shows potential for growth")),
                KeyValue("Growth Potential", f"{_number(growth)}/10" if growth is not None else "N/A"),
            ]
            if insights.key_findings:
                fields += [Label("Key Findings:"), BulletList(insights.key_findings)]
            if insights.improvement_areas:
                fields += [Label("Improvement Areas:"), BulletList(insights.improvement_areas[:3])]
        return CardSpec("AI-POWERED INSIGHTS", fields, width=FULL_WIDTH, height=AUTO)

    def _security_card(self, report: SkillGapReport) -> CardSpec:
        security = report.security_metrics
        return CardSpec("SECURITY ASSESSMENT", [
            KeyValue("Security Score", f"{security.overall_score}/100"),
            KeyValue("Violations", str(security.total_violations)),
            KeyValue("Tab Switches", str(security.tab_switches)),
            KeyValue("Copy Attempts", str(security.copy_attempts)),
            KeyValue("Assessment Integrity",
                     "Excellent" if security.total_violations == 0 else "Good"),
        ], width=FULL_WIDTH, height=35)


@dataclass
class RenderedReport:
    """A finished report, ready to stream as a download."""
    content: bytes
    filename: str
    page_count: int
    media_type: str = "application/pdf"


class SkillGapReportService:
    """Builds, paginates, and renders skill gap reports.

    Usage:
        service = SkillGapReportService()
        pages = service.layout(report)        # draw ops, e.g. for previews
        rendered = service.render_pdf(report)  # bytes + download filename
    """

    def __init__(self, metrics: Optional[PageMetrics] = None):
        self.metrics = metrics or PageMetrics.a4()
        self.builder = SkillGapReportBuilder()
        self.geometry = CardGeometry(font=settings.REPORT_FONT, bold_font=settings.REPORT_BOLD_FONT)

    def _paginator(self, now: datetime) -> ReportPaginator:
        decoration = PageDecoration(
            footer_text=settings.REPORT_FOOTER_TEXT,
            generated_at=f"Generated: {now.strftime('%Y-%m-%d %H:%M')} | Confidential Assessment",
            font=settings.REPORT_FONT,
            bold_font=settings.REPORT_BOLD_FONT,
        )
        return ReportPaginator(
            self.metrics,
            card_layout=CardLayout(self.geometry, measurer_factory=ReportLabMeasurer),
            decoration=decoration,
        )

    def layout(self, report: SkillGapReport, now: Optional[datetime] = None) -> list[Page]:
        now = now or datetime.now()
        document = self.builder.build(report)
        return self._paginator(now).paginate(document)

    def render_pdf(self, report: SkillGapReport, now: Optional[datetime] = None) -> RenderedReport:
        now = now or datetime.now()
        pages = self.layout(report, now)
        content = PDFRenderer(self.metrics).render(
            pages,
            title=f"Skill Gap Report - {report.candidate_info.name}",
            author=settings.REPORT_BRAND_NAME,
        )
        return RenderedReport(
            content=content,
            filename=report_filename(report.candidate_id, "pdf", now,
                                     prefix=settings.REPORT_FILE_PREFIX),
            page_count=len(pages),
        )
