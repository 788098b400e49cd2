"""
Pydantic schemas for the Reports API.

Two kinds of request body:
- SkillGapReport: the skill-gap analysis record produced by the assessment
  backend. Accepts the backend's camelCase keys (candidateInfo,
  performanceMetrics, ...) as well as snake_case.
- DocumentRequest: a generic card document (sections → cards/rows →
  fields) for callers that assemble their own layout.

Shape validation happens here; geometry validation (zero widths, cards
past the page edge, ...) happens in the layout engine and comes back as a
422 from the router.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.layout import model as layout


class CamelModel(BaseModel):
    """Accepts camelCase (backend JSON) or snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Skill gap report payload ---

class CandidateInfo(CamelModel):
    name: str = "N/A"
    email: str = ""
    employee_id: str = ""
    department: Optional[str] = None
    position: Optional[str] = None


class AssessmentInfo(CamelModel):
    title: str = "Assessment"
    domain: str = "General"
    level: str = "Standard"
    total_questions: int = 0


class PerformanceMetrics(CamelModel):
    score: float = 0
    percentage: float = 0
    passed: Optional[bool] = None
    time_spent: int = 0  # seconds
    questions_answered: int = 0
    total_questions: int = 0
    accuracy: Optional[float] = None
    speed: Optional[str] = None


class IndustryAnalysis(CamelModel):
    market_demand: Optional[str] = None
    salary_range: Optional[str] = None
    industry_percentile: Optional[str] = None
    skills_match: Optional[Union[float, str]] = None
    competition_level: Optional[str] = None
    suitable_roles: list[str] = []


class PredictiveAnalytics(CamelModel):
    future_performance: Optional[float] = None
    promotion_readiness: Optional[float] = None
    career_track: Optional[str] = None
    learning_curve: Optional[str] = None
    estimated_time_to_improve: Optional[str] = None


class TrainingRecommendations(CamelModel):
    priority: Optional[str] = None
    immediate: list[str] = []
    short_term: list[str] = []
    long_term: list[str] = []
    focus_areas: list[str] = []
    suggested_courses: list[str] = []


class AIInsights(CamelModel):
    overall_assessment: Optional[str] = None
    growth_potential: Optional[float] = None
    market_position: Optional[str] = None
    top_strength: Optional[str] = None
    key_findings: list[str] = []
    improvement_areas: list[str] = []
    recommendations: list[str] = []


class SecurityMetrics(CamelModel):
    overall_score: int = 100
    total_violations: int = 0
    tab_switches: int = 0
    copy_attempts: int = 0


class SkillGapReport(CamelModel):
    """Skill gap analysis for one candidate's test result."""
    candidate_id: str
    generated_at: Optional[datetime] = None
    candidate_info: CandidateInfo = CandidateInfo()
    test_info: AssessmentInfo = AssessmentInfo()
    performance_metrics: PerformanceMetrics = PerformanceMetrics()
    skill_gaps: list[str] = []
    strength_areas: list[str] = []
    industry_analysis: Optional[IndustryAnalysis] = None
    predictive_analytics: Optional[PredictiveAnalytics] = None
    training_recommendations: Optional[TrainingRecommendations] = None
    ai_insights: Optional[AIInsights] = None
    security_metrics: Optional[SecurityMetrics] = None

    @field_validator("candidate_id", mode="before")
    @classmethod
    def coerce_candidate_id(cls, v):
        # The backend sends numeric user IDs
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("candidate_id")
    @classmethod
    def require_candidate_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("candidate_id must not be empty")
        return v.strip()


# --- Generic document payload ---

class LabelSchema(BaseModel):
    type: Literal["label"] = "label"
    text: str = ""

    def to_layout(self):
        return layout.Label(self.text)


class KeyValueSchema(BaseModel):
    type: Literal["key_value"] = "key_value"
    label: str
    value: str = ""

    def to_layout(self):
        return layout.KeyValue(self.label, self.value)


class BulletListSchema(BaseModel):
    type: Literal["bullet_list"] = "bullet_list"
    items: list[str] = []
    style: Literal["bullet", "lettered", "numbered"] = "bullet"

    def to_layout(self):
        return layout.BulletList(self.items, self.style)


class ParagraphSchema(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    text: str

    def to_layout(self):
        return layout.Paragraph(self.text)


FieldSchema = Annotated[
    Union[LabelSchema, KeyValueSchema, BulletListSchema, ParagraphSchema],
    Field(discriminator="type"),
]


class CardSchema(BaseModel):
    type: Literal["card"] = "card"
    title: str
    fields: list[FieldSchema] = []
    width: float
    height: Union[Literal["auto"], float] = "auto"
    header_color: str = "primary"
    body_color: str = "white"
    border_color: str = "lavender"
    x: Optional[float] = None

    def to_layout(self) -> layout.CardSpec:
        return layout.CardSpec(
            title=self.title,
            fields=[f.to_layout() for f in self.fields],
            width=self.width,
            height=self.height,
            header_color=self.header_color,
            body_color=self.body_color,
            border_color=self.border_color,
            x=self.x,
        )


class RowSchema(BaseModel):
    type: Literal["row"] = "row"
    cards: list[CardSchema]
    gap: float = 2

    def to_layout(self) -> layout.Row:
        return layout.Row([card.to_layout() for card in self.cards], gap=self.gap)


BlockSchema = Annotated[Union[CardSchema, RowSchema], Field(discriminator="type")]


class SectionSchema(BaseModel):
    blocks: list[BlockSchema]

    def to_layout(self) -> layout.Section:
        return layout.Section([block.to_layout() for block in self.blocks])


class PageMetricsSchema(BaseModel):
    width: float = 210
    height: float = 297
    margin_top: float = 10
    margin_bottom: float = 10
    header_height: float = 20
    footer_height: float = 10
    margin_left: float = 10
    block_spacing: float = 5

    def to_layout(self) -> layout.PageMetrics:
        return layout.PageMetrics(**self.model_dump())


class DocumentRequest(BaseModel):
    """A complete card document plus optional page geometry (A4 by default)."""
    title: str = ""
    subtitle: str = ""
    sections: list[SectionSchema]
    page: PageMetricsSchema = PageMetricsSchema()

    def to_layout(self) -> layout.ReportDocument:
        return layout.ReportDocument(
            sections=[section.to_layout() for section in self.sections],
            title=self.title,
            subtitle=self.subtitle,
        )


# --- Responses ---

class PageResponse(BaseModel):
    index: int
    ops: list[dict]


class LayoutResponse(BaseModel):
    """Paginated layout: every page with its draw ops in paint order."""
    page_count: int
    pages: list[PageResponse]

    @classmethod
    def from_pages(cls, pages: list[layout.Page]) -> "LayoutResponse":
        return cls(
            page_count=len(pages),
            pages=[
                PageResponse(
                    index=page.index,
                    ops=[{"kind": type(op).__name__, **asdict(op)} for op in page.draw_ops],
                )
                for page in pages
            ],
        )
