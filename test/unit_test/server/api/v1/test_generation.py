"""Tests for the generation and job endpoints.

Background jobs run against the fake image client before the HTTP call
returns, so results can be checked right after the request.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from promptframe_ai.core.database.entities.generation import GeneratedImage, GenerationJob
from promptframe_ai.core.database.entities.image_styles import ImageStyle
from promptframe_ai.core.database.repositories import (
    GeneratedImageRepository,
    GenerationJobRepository,
    ImageStyleRepository,
)
from promptframe_ai.studio.image_io import to_data_url

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def style(session) -> ImageStyle:
    return await ImageStyleRepository(session).create(ImageStyle(name="Watercolor", style_prompt="soft watercolor"))


def _generate_payload(style_id, **settings):
    body = {"model": "dall-e-3", "size": "1024x1024", "quality": "standard", "variations": 1}
    body.update(settings)
    return {"jobName": "Launch", "styleId": style_id, "concepts": ["a kite", "a boat"], "settings": body}


@pytest_asyncio.fixture
async def source_image(session, user, style, image_bytes) -> GeneratedImage:
    job = await GenerationJobRepository(session).create(
        GenerationJob(
            name="Launch",
            user_id=user.id,
            session_id="project-1",
            style_id=style.id,
            visual_concepts=["a kite"],
            settings={"model": "gpt-image-1", "size": "1024x1024", "quality": "standard", "variations": 1},
            status="completed",
            progress=100,
        )
    )
    return await GeneratedImageRepository(session).create(
        GeneratedImage(
            user_id=user.id,
            job_id=job.id,
            visual_concept="a kite",
            image_url=to_data_url(image_bytes("PNG")),
            prompt="a kite",
            status="completed",
        )
    )


class TestGenerate:
    """Tests for POST /api/generate."""

    async def test_generate_runs_the_job(self, user_client: AsyncClient, style, fake_image_client):
        response = await user_client.post("/api/generate", json=_generate_payload(style.id, variations=2))

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Generation started"
        assert "modifiedConcept" not in body

        job = (await user_client.get(f"/api/jobs/{body['jobId']}")).json()
        assert job["status"] == "completed"
        assert job["progress"] == 100
        assert job["visualConcepts"] == ["a kite", "a boat"]
        assert job["settings"]["variations"] == 2

        images = (await user_client.get(f"/api/jobs/{body['jobId']}/images")).json()
        assert len(images) == 4
        assert {image["status"] for image in images} == {"completed"}
        assert all(image["imageUrl"].startswith("https://mock/images/generated-") for image in images)
        assert "soft watercolor" in fake_image_client.generate_calls[0]["prompt"]

    async def test_unsupported_size(self, user_client: AsyncClient, style, fake_image_client):
        payload = _generate_payload(style.id, model="dall-e-2", size="1536x1024")
        response = await user_client.post("/api/generate", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "Model dall-e-2 does not support size 1536x1024",
            "details": "Supported sizes for dall-e-2: 1024x1024",
        }
        assert fake_image_client.generate_calls == []

    async def test_unsupported_quality(self, user_client: AsyncClient, style):
        payload = _generate_payload(style.id, model="dall-e-2", quality="hd")
        response = await user_client.post("/api/generate", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Model dall-e-2 does not support HD quality"

    async def test_unknown_quality(self, user_client: AsyncClient, style, fake_image_client):
        response = await user_client.post("/api/generate", json=_generate_payload(style.id, quality="ultra"))

        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "Unsupported quality: ultra",
            "details": "Supported quality levels: standard, hd",
        }
        assert fake_image_client.generate_calls == []

    async def test_unknown_model(self, user_client: AsyncClient, style):
        response = await user_client.post("/api/generate", json=_generate_payload(style.id, model="midjourney"))
        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported model: midjourney"

    @pytest.mark.parametrize("variations", [0, 11])
    async def test_variations_out_of_range(self, user_client: AsyncClient, style, variations):
        response = await user_client.post("/api/generate", json=_generate_payload(style.id, variations=variations))
        assert response.status_code == 422

    async def test_empty_concepts(self, user_client: AsyncClient, style):
        payload = _generate_payload(style.id)
        payload["concepts"] = []
        assert (await user_client.post("/api/generate", json=payload)).status_code == 422

    async def test_missing_style(self, user_client: AsyncClient):
        response = await user_client.post("/api/generate", json=_generate_payload("missing"))
        assert response.status_code == 404
        assert response.json()["detail"] == "Style not found"

    async def test_requires_login(self, client: AsyncClient, style):
        assert (await client.post("/api/generate", json=_generate_payload(style.id))).status_code == 401


class TestJobs:
    async def test_missing_job(self, user_client: AsyncClient):
        response = await user_client.get("/api/jobs/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "Job not found"

    async def test_foreign_job(self, user_client: AsyncClient, other_client: AsyncClient, style):
        job_id = (await user_client.post("/api/generate", json=_generate_payload(style.id))).json()["jobId"]

        response = await other_client.get(f"/api/jobs/{job_id}")
        assert response.status_code == 403
        assert response.json()["detail"] == "Access denied: not your job"
        assert (await other_client.get(f"/api/jobs/{job_id}/images")).status_code == 403

    async def test_admin_can_read_any_job(self, user_client: AsyncClient, admin_client: AsyncClient, style):
        job_id = (await user_client.post("/api/generate", json=_generate_payload(style.id))).json()["jobId"]
        assert (await admin_client.get(f"/api/jobs/{job_id}")).status_code == 200


class TestRegenerate:
    """Tests for POST /api/regenerate."""

    async def test_edit_with_instruction(self, user_client: AsyncClient, source_image, fake_image_client):
        response = await user_client.post(
            "/api/regenerate", json={"sourceImageId": source_image.id, "instruction": "make it red"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Regeneration started"
        assert body["modifiedConcept"] == "a kite (make it red)"

        job = (await user_client.get(f"/api/jobs/{body['jobId']}")).json()
        assert job["name"] == "Edit: a kite (make it red)"
        assert job["sessionId"] == "project-1"
        assert job["status"] == "completed"

        images = (await user_client.get(f"/api/jobs/{body['jobId']}/images")).json()
        assert len(images) == 1
        assert images[0]["sourceImageId"] == source_image.id
        assert images[0]["regenerationInstruction"] == "make it red"
        assert images[0]["prompt"] == "Image edit: make it red (applied to original image)"
        assert len(fake_image_client.edit_calls) == 1
        assert fake_image_client.generate_calls == []

    async def test_enhancement_with_settings_only(self, user_client: AsyncClient, source_image):
        settings = {"model": "gpt-image-1", "size": "1024x1536", "quality": "hd", "variations": 2}
        response = await user_client.post(
            "/api/regenerate", json={"sourceImageId": source_image.id, "settings": settings}
        )

        body = response.json()
        assert body["modifiedConcept"] == "a kite"
        job = (await user_client.get(f"/api/jobs/{body['jobId']}")).json()
        assert job["name"] == "Enhancement: a kite"
        assert job["settings"]["size"] == "1024x1536"

    async def test_regenerate_without_reference(self, user_client: AsyncClient, source_image, fake_image_client):
        response = await user_client.post(
            "/api/regenerate",
            json={
                "sourceImageId": source_image.id,
                "instruction": "at night",
                "useOriginalAsReference": False,
                "sessionId": "project-2",
            },
        )

        body = response.json()
        job = (await user_client.get(f"/api/jobs/{body['jobId']}")).json()
        assert job["name"] == "Regen: a kite (at night)"
        assert job["sessionId"] == "project-2"
        assert "Subject: a kite (at night)" in fake_image_client.generate_calls[0]["prompt"]
        assert fake_image_client.edit_calls == []

    async def test_settings_update_label(self, user_client: AsyncClient, source_image):
        response = await user_client.post(
            "/api/regenerate",
            json={
                "sourceImageId": source_image.id,
                "useOriginalAsReference": False,
                "settings": {"model": "dall-e-3", "size": "1024x1024"},
            },
        )
        job = (await user_client.get(f"/api/jobs/{response.json()['jobId']}")).json()
        assert job["name"] == "Settings Update: a kite"

    async def test_requires_instruction_or_settings(self, user_client: AsyncClient, source_image):
        response = await user_client.post("/api/regenerate", json={"sourceImageId": source_image.id, "instruction": ""})
        assert response.status_code == 400
        assert response.json()["detail"] == "Either instruction or settings must be provided for regeneration"

    async def test_editing_requires_capable_model(self, user_client: AsyncClient, source_image):
        response = await user_client.post(
            "/api/regenerate",
            json={"sourceImageId": source_image.id, "settings": {"model": "dall-e-3", "size": "1024x1024"}},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Model not supported for image editing"

    async def test_missing_source_image(self, user_client: AsyncClient):
        response = await user_client.post("/api/regenerate", json={"sourceImageId": "missing", "instruction": "x"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Source image not found"

    async def test_foreign_source_image(self, other_client: AsyncClient, source_image):
        payload = {"sourceImageId": source_image.id, "instruction": "x"}
        response = await other_client.post("/api/regenerate", json=payload)
        assert response.status_code == 403
        assert response.json()["detail"] == "Access denied: not your image"

    async def test_source_without_job(self, user_client: AsyncClient, session, user):
        orphan = await GeneratedImageRepository(session).create(
            GeneratedImage(user_id=user.id, visual_concept="a kite", image_url="https://mock/a.png", prompt="p")
        )
        response = await user_client.post("/api/regenerate", json={"sourceImageId": orphan.id, "instruction": "x"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Source job not found"
