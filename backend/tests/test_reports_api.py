"""
Tests for the Reports API endpoints.

These run the real layout engine and PDF renderer; nothing is mocked.
"""

import re

import pytest


def document(**overrides):
    body = {
        "title": "Team Report",
        "sections": [{
            "blocks": [
                {
                    "type": "row",
                    "gap": 5,
                    "cards": [
                        {"type": "card", "title": "LEFT", "width": 90, "height": 40,
                         "fields": [{"type": "key_value", "label": "Score", "value": "5/7"}]},
                        {"type": "card", "title": "RIGHT", "width": 95, "height": 40,
                         "fields": [{"type": "label", "text": "Above Average"}]},
                    ],
                },
                {
                    "type": "card", "title": "NOTES", "width": 190,
                    "fields": [
                        {"type": "bullet_list", "items": ["one", "two"], "style": "lettered"},
                        {"type": "paragraph", "text": "Closing remarks."},
                    ],
                },
            ],
        }],
    }
    body.update(overrides)
    return body


# --- Skill gap reports ---

@pytest.mark.asyncio
async def test_skill_gap_pdf_download(client, report_payload):
    response = await client.post("/api/v1/reports/skill-gap/pdf", json=report_payload)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert re.fullmatch(
        r'attachment; filename="42_Report_\d{14}\.pdf"',
        response.headers["content-disposition"],
    )
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_skill_gap_layout(client, report_payload):
    response = await client.post("/api/v1/reports/skill-gap/layout", json=report_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["page_count"] == len(data["pages"]) >= 1
    first = data["pages"][0]["ops"][0]
    assert first["kind"] == "FilledRect"
    assert first["y"] == 30


@pytest.mark.asyncio
async def test_skill_gap_requires_candidate_id(client, report_payload):
    report_payload.pop("candidateId")
    response = await client.post("/api/v1/reports/skill-gap/pdf", json=report_payload)
    assert response.status_code == 422


# --- Generic documents ---

@pytest.mark.asyncio
async def test_document_layout(client):
    response = await client.post("/api/v1/reports/layout", json=document())

    assert response.status_code == 200
    data = response.json()
    assert data["page_count"] == 1
    texts = [op["text"] for op in data["pages"][0]["ops"] if op["kind"] == "TextLine"]
    for expected in ("LEFT", "RIGHT", "NOTES", "Score:", "5/7", "A)", "one", "Page 1 of 1"):
        assert expected in texts


@pytest.mark.asyncio
async def test_document_pdf(client):
    response = await client.post("/api/v1/reports/pdf", json=document())

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="Team_Report.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_custom_page_size(client):
    body = document(page={"width": 150, "height": 200})
    body["sections"][0]["blocks"] = body["sections"][0]["blocks"][1:]
    body["sections"][0]["blocks"][0]["width"] = 130

    response = await client.post("/api/v1/reports/layout", json=body)
    assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("mutate", [
    lambda body: body["sections"][0]["blocks"][1].update(width=0),
    lambda body: body["sections"][0]["blocks"][1].update(x=50),
    lambda body: body["sections"][0].update(blocks=[]),
    lambda body: body.update(sections=[]),
    lambda body: body.update(page={"header_height": 300}),
])
async def test_invalid_geometry_is_422(client, mutate):
    body = document()
    mutate(body)

    response = await client.post("/api/v1/reports/layout", json=body)
    assert response.status_code == 422
    assert response.json()["detail"]


@pytest.mark.asyncio
async def test_unknown_field_type_is_422(client):
    body = document()
    body["sections"][0]["blocks"][1]["fields"] = [{"type": "chart", "data": [1, 2]}]

    response = await client.post("/api/v1/reports/layout", json=body)
    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize("title,filename", [
    ("Rapport d’évaluation Ω", "Rapport_d_valuation.pdf"),
    ('Team "A" Report', "Team_A_Report.pdf"),
    ("", "report.pdf"),
])
async def test_document_pdf_filename_is_header_safe(client, title, filename):
    response = await client.post("/api/v1/reports/pdf", json=document(title=title))

    assert response.status_code == 200
    assert response.headers["content-disposition"] == f'attachment; filename="{filename}"'
    assert response.content.startswith(b"%PDF")
