"""Unit tests for concept list generation and conversational refinement."""

import pytest

from promptframe_ai.core.database.entities.concept_lists import ConceptList
from promptframe_ai.studio import refinement
from promptframe_ai.studio.errors import ConceptParseError, RefinementError
from promptframe_ai.studio.prompts import (
    REFINEMENT_COMPANY,
    build_concept_list_message,
    build_concept_system_prompt,
    build_revision_system_prompt,
    build_selective_feedback,
)


def _concept_list(*texts: str) -> ConceptList:
    concepts = [{"concept": text} for text in texts]
    return ConceptList(
        name="Acme - 2026-01-01",
        company_name="Acme",
        marketing_content="Trail running shoes",
        temperature=0.5,
        literal_metaphorical=0.8,
        simple_complex=0.0,
        reference_image_url="data:image/png;base64,YWJj",
        concepts=concepts,
        conversation_history=refinement.initial_history("Trail running shoes", None, concepts),
    )


class TestGenerateConcepts:
    """Tests for generate_concepts."""

    async def test_parses_concepts_and_sends_prompts(self, fake_text_client):
        fake_text_client.queue('["a muddy shoe", "a mountain path"]')

        concepts = await refinement.generate_concepts(
            fake_text_client,
            "Acme",
            "Trail running shoes",
            2,
            temperature=0.4,
            literal_metaphorical=-1.0,
            reference_image_url="https://mock/ref.png",
        )

        assert concepts == [{"concept": "a muddy shoe"}, {"concept": "a mountain path"}]
        call = fake_text_client.calls[0]
        assert call["system_prompt"] == build_concept_system_prompt(None, -1.0, 0.0)
        assert call["user_text"] == build_concept_list_message("Acme", "Trail running shoes", 2, True)
        assert call["image_url"] == "https://mock/ref.png"
        assert call["temperature"] == 0.4

    async def test_custom_prompt_text(self, fake_text_client):
        fake_text_client.queue('["x"]')
        await refinement.generate_concepts(fake_text_client, "Acme", "Shoes", 1, prompt_text="Be bold.")
        assert fake_text_client.calls[0]["system_prompt"].startswith("Be bold.")

    async def test_empty_response_is_a_parse_error(self, fake_text_client):
        fake_text_client.queue("")
        with pytest.raises(ConceptParseError, match="empty"):
            await refinement.generate_concepts(fake_text_client, "Acme", "Shoes", 3)


class TestReviseConcepts:
    """Tests for revise_concepts."""

    async def test_returns_revised_concepts(self, fake_text_client):
        concept_list = _concept_list("a", "b")
        fake_text_client.queue('["a2", "b2"]')

        revised = await refinement.revise_concepts(fake_text_client, concept_list, "more color")

        assert revised == [{"concept": "a2"}, {"concept": "b2"}]
        call = fake_text_client.calls[0]
        assert call["system_prompt"] == build_revision_system_prompt(None)
        assert call["temperature"] == refinement.REVISION_TEMPERATURE
        assert "User Feedback:\nmore color" in call["user_text"]

    async def test_unparseable_answer_keeps_concepts(self, fake_text_client):
        concept_list = _concept_list("a", "b")
        fake_text_client.queue("I could not do that")

        revised = await refinement.revise_concepts(fake_text_client, concept_list, "more color")

        assert revised == [{"concept": "a"}, {"concept": "b"}]


class TestRefine:
    """Tests for refine."""

    @pytest.mark.parametrize("feedback", ["", "   "])
    async def test_feedback_is_required(self, fake_text_client, feedback):
        with pytest.raises(RefinementError, match="Feedback is required"):
            await refinement.refine(_concept_list("a"), feedback, None, fake_text_client)
        assert fake_text_client.calls == []

    async def test_invalid_index(self, fake_text_client):
        with pytest.raises(RefinementError, match="Invalid concept index: 5"):
            await refinement.refine(_concept_list("a", "b"), "warmer", [5], fake_text_client)

    async def test_refine_all_concepts(self, fake_text_client):
        concept_list = _concept_list("a", "b")
        fake_text_client.queue('["c", "d"]')

        await refinement.refine(concept_list, "warmer", None, fake_text_client)

        assert concept_list.concepts == [{"concept": "c"}, {"concept": "d"}]
        assert concept_list.previous_state["concepts"] == [{"concept": "a"}, {"concept": "b"}]
        assert len(concept_list.previous_state["conversation_history"]) == 2
        assert concept_list.conversation_history[-2:] == [
            {"role": "user", "content": "warmer"},
            {"role": "assistant", "content": "c\nd"},
        ]

        call = fake_text_client.calls[0]
        assert call["user_text"].startswith(f"Company: {REFINEMENT_COMPANY}")
        assert "USER: Trail running shoes\n\nASSISTANT: a\nb\n\nUSER: warmer" in call["user_text"]
        assert "Generate 2 distinct" in call["user_text"]
        assert call["temperature"] == 0.5
        assert call["image_url"] == "data:image/png;base64,YWJj"

    async def test_refine_selected_concepts_only(self, fake_text_client):
        concept_list = _concept_list("a", "b", "c")
        fake_text_client.queue('["c2"]')

        await refinement.refine(concept_list, "add a dog", [2, 2], fake_text_client)

        assert concept_list.concepts == [{"concept": "a"}, {"concept": "b"}, {"concept": "c2"}]
        assert concept_list.conversation_history[-1] == {"role": "assistant", "content": "c2"}
        user_text = fake_text_client.calls[0]["user_text"]
        assert build_selective_feedback(["c"], "add a dog") in user_text
        assert "Generate 1 distinct" in user_text

    async def test_short_selective_answer_keeps_unanswered_concepts(self, fake_text_client):
        concept_list = _concept_list("a", "b", "c")
        fake_text_client.queue('["a2"]')

        await refinement.refine(concept_list, "brighter", [0, 1], fake_text_client)

        assert concept_list.concepts == [{"concept": "a2"}, {"concept": "b"}, {"concept": "c"}]
        assert concept_list.conversation_history[-1] == {"role": "assistant", "content": "a2"}
        assert "Generate 2 distinct" in fake_text_client.calls[0]["user_text"]

    async def test_surplus_selective_answer_only_lands_in_history(self, fake_text_client):
        concept_list = _concept_list("a", "b", "c")
        fake_text_client.queue('["b2", "extra"]')

        await refinement.refine(concept_list, "brighter", [1], fake_text_client)

        assert concept_list.concepts == [{"concept": "a"}, {"concept": "b2"}, {"concept": "c"}]
        assert concept_list.conversation_history[-2:] == [
            {"role": "user", "content": "brighter"},
            {"role": "assistant", "content": "b2\nextra"},
        ]

    async def test_parse_failure_leaves_list_unchanged(self, fake_text_client):
        concept_list = _concept_list("a", "b")
        fake_text_client.queue("not json")

        with pytest.raises(ConceptParseError):
            await refinement.refine(concept_list, "warmer", None, fake_text_client)

        assert concept_list.concepts == [{"concept": "a"}, {"concept": "b"}]
        assert concept_list.previous_state is None


class TestUndo:
    async def test_undo_restores_previous_state_once(self, fake_text_client):
        concept_list = _concept_list("a", "b")
        history = list(concept_list.conversation_history)
        fake_text_client.queue('["c", "d"]')
        await refinement.refine(concept_list, "warmer", None, fake_text_client)

        refinement.undo(concept_list)

        assert concept_list.concepts == [{"concept": "a"}, {"concept": "b"}]
        assert concept_list.conversation_history == history
        assert concept_list.previous_state is None
        with pytest.raises(RefinementError, match="Nothing to undo"):
            refinement.undo(concept_list)


class TestGenerateMore:
    """Tests for generate_more."""

    async def test_appends_new_concepts_and_conversation(self, fake_text_client):
        concept_list = _concept_list("a", "b")
        fake_text_client.queue('["c", "d", "e"]')

        await refinement.generate_more(concept_list, fake_text_client)

        assert concept_list.concepts == [{"concept": text} for text in ("a", "b", "c", "d", "e")]
        assert concept_list.conversation_history[-2:] == [
            {"role": "user", "content": refinement.GENERATE_MORE_INSTRUCTION},
            {"role": "assistant", "content": "c\nd\ne"},
        ]
        assert concept_list.previous_state is None

        call = fake_text_client.calls[0]
        assert call["user_text"].startswith(f"Company: {REFINEMENT_COMPANY}")
        assert (
            "USER: Trail running shoes\n\nASSISTANT: a\nb\n\n"
            "USER: Generate 3 additional unique concepts different from the ones above."
        ) in call["user_text"]
        assert "Generate 3 distinct" in call["user_text"]
        assert call["temperature"] == 0.5
        assert call["image_url"] == "data:image/png;base64,YWJj"

    async def test_keeps_undo_snapshot_of_last_refinement(self, fake_text_client):
        concept_list = _concept_list("a")
        fake_text_client.queue('["b"]')
        await refinement.refine(concept_list, "warmer", None, fake_text_client)
        snapshot = dict(concept_list.previous_state)
        fake_text_client.queue('["c", "d", "e"]')

        await refinement.generate_more(concept_list, fake_text_client)

        assert concept_list.previous_state == snapshot

    async def test_without_history_uses_marketing_content(self, fake_text_client):
        concept_list = _concept_list("a")
        concept_list.conversation_history = []
        fake_text_client.queue('["b", "c", "d"]')

        await refinement.generate_more(concept_list, fake_text_client)

        assert (
            f"Trail running shoes\n\n{refinement.GENERATE_MORE_INSTRUCTION}" in fake_text_client.calls[0]["user_text"]
        )
        assert concept_list.conversation_history[0]["role"] == "user"

    async def test_parse_failure_leaves_list_unchanged(self, fake_text_client):
        concept_list = _concept_list("a", "b")
        history = list(concept_list.conversation_history)
        fake_text_client.queue("not json")

        with pytest.raises(ConceptParseError):
            await refinement.generate_more(concept_list, fake_text_client)

        assert concept_list.concepts == [{"concept": "a"}, {"concept": "b"}]
        assert concept_list.conversation_history == history


class TestDeleteConcept:
    def test_removes_concept_and_history_line(self):
        concept_list = _concept_list("a", "b", "c")

        refinement.delete_concept(concept_list, 1)

        assert concept_list.concepts == [{"concept": "a"}, {"concept": "c"}]
        assert concept_list.conversation_history == [
            {"role": "user", "content": "Trail running shoes"},
            {"role": "assistant", "content": "a\nc"},
        ]

    def test_invalid_index(self):
        with pytest.raises(RefinementError, match="Invalid concept index: 3"):
            refinement.delete_concept(_concept_list("a"), 3)


def test_initial_history_appends_instructions():
    history = refinement.initial_history("brief", "be bold", [{"concept": "a"}, "b"])
    assert history == [
        {"role": "user", "content": "brief\n\nAdditional Instructions: be bold"},
        {"role": "assistant", "content": "a\nb"},
    ]

