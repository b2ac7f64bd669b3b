"""Unit tests for image model capability checks and image API parameters."""

from types import SimpleNamespace

import pytest

from promptframe_ai.studio.capabilities import (
    build_image_params,
    get_capability,
    map_quality,
    supports_transparency,
    validate_settings,
)
from promptframe_ai.studio.errors import (
    CapabilityError,
    EditingNotSupportedError,
    UnsupportedModelError,
    UnsupportedQualityError,
    UnsupportedSizeError,
)


def _settings(model="gpt-image-1", size="1024x1024", quality="standard"):
    return SimpleNamespace(model=model, size=size, quality=quality)


class TestValidateSettings:
    """Tests for validate_settings."""

    @pytest.mark.parametrize("model", ["dall-e-2", "dall-e-3", "gpt-image-1"])
    def test_square_standard_is_always_accepted(self, model):
        capability = validate_settings(_settings(model=model))
        assert capability is get_capability(model)

    def test_unknown_model(self):
        with pytest.raises(UnsupportedModelError) as exc_info:
            validate_settings(_settings(model="midjourney"))
        assert exc_info.value.message == "Unsupported model: midjourney"

    def test_dall_e_2_rejects_landscape(self):
        with pytest.raises(UnsupportedSizeError) as exc_info:
            validate_settings(_settings(model="dall-e-2", size="1536x1024"))
        assert exc_info.value.message == "Model dall-e-2 does not support size 1536x1024"
        assert exc_info.value.details == "Supported sizes for dall-e-2: 1024x1024"

    def test_dall_e_2_rejects_hd(self):
        with pytest.raises(UnsupportedQualityError) as exc_info:
            validate_settings(_settings(model="dall-e-2", quality="hd"))
        assert "standard quality" in exc_info.value.details

    def test_unknown_quality_level(self):
        with pytest.raises(UnsupportedQualityError) as exc_info:
            validate_settings(_settings(model="dall-e-3", quality="ultra"))
        assert exc_info.value.message == "Unsupported quality: ultra"
        assert exc_info.value.quality == "ultra"

    def test_dall_e_3_accepts_hd_portrait(self):
        validate_settings(_settings(model="dall-e-3", size="1024x1536", quality="hd"))

    def test_editing_requires_capable_model(self):
        with pytest.raises(EditingNotSupportedError) as exc_info:
            validate_settings(_settings(model="dall-e-3"), require_editing=True)
        assert exc_info.value.message == "Model not supported for image editing"
        assert '"dall-e-3"' in exc_info.value.details

    def test_editing_allowed_for_gpt_image_1(self):
        validate_settings(_settings(), require_editing=True)

    def test_all_errors_are_capability_errors(self):
        for settings in (_settings(model="x"), _settings(model="dall-e-2", quality="hd")):
            with pytest.raises(CapabilityError):
                validate_settings(settings)


class TestMapQuality:
    """Tests for quality translation per model."""

    def test_gpt_image_1_uses_high_and_medium(self):
        assert map_quality("gpt-image-1", "hd") == "high"
        assert map_quality("gpt-image-1", "standard") == "medium"

    def test_dall_e_3_keeps_values(self):
        assert map_quality("dall-e-3", "hd") == "hd"
        assert map_quality("dall-e-3", "standard") == "standard"

    def test_dall_e_2_has_no_quality(self):
        assert map_quality("dall-e-2", "standard") is None


class TestBuildImageParams:
    """Tests for build_image_params."""

    def test_gpt_image_1_with_transparency(self):
        params = build_image_params("gpt-image-1", "1536x1024", "hd", "a fox", transparency=True)
        assert params == {
            "model": "gpt-image-1",
            "prompt": "a fox",
            "n": 1,
            "size": "1536x1024",
            "quality": "high",
            "background": "transparent",
        }

    def test_dall_e_2_omits_quality(self):
        params = build_image_params("dall-e-2", "1024x1024", "standard", "a fox")
        assert "quality" not in params
        assert params["n"] == 1

    def test_transparency_ignored_for_other_models(self):
        params = build_image_params("dall-e-3", "1024x1024", "standard", "a fox", transparency=True)
        assert "background" not in params
        assert params["quality"] == "standard"

    def test_unknown_model_raises_value_error(self):
        with pytest.raises(ValueError, match="Unsupported model"):
            build_image_params("nope", "1024x1024", "standard", "a fox")

    def test_unsupported_size_raises_value_error(self):
        with pytest.raises(ValueError, match="does not support size"):
            build_image_params("dall-e-2", "1024x1536", "standard", "a fox")


def test_supports_transparency():
    assert supports_transparency("gpt-image-1", True) is True
    assert supports_transparency("gpt-image-1", False) is False
    assert supports_transparency("dall-e-3", True) is False
