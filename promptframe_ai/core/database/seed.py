"""
Default data seeding.

``seed_defaults`` is run by the server lifespan when
``PROMPTFRAME_AI_SEED_DEFAULTS`` is enabled. Each group of rows is only
inserted when its table is empty, so running it repeatedly is harmless.
"""

from __future__ import annotations

from typing import Any, Dict, List

from sqlmodel.ext.asyncio.session import AsyncSession

from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.server.auth.passwords import hash_password

from .entities.image_styles import ImageStyle
from .entities.prompts import MediaAdapter
from .entities.users import User, UserRole
from .repositories import ImageStyleRepository, MediaAdapterRepository, UserRepository

logger = get_logger(__name__)

DEFAULT_STYLES: List[Dict[str, Any]] = [
    {
        "name": "Professional Corporate",
        "style_prompt": (
            "professional corporate style, clean modern design, business presentation quality, "
            "high-end commercial photography"
        ),
        "ai_style_data": {
            "description": "Clean, modern corporate style for business presentations",
            "mood": "professional and trustworthy",
        },
    },
    {
        "name": "Creative Artistic",
        "style_prompt": (
            "creative artistic style, vibrant colors, bold design elements, contemporary art inspiration, "
            "dynamic composition"
        ),
        "ai_style_data": {
            "description": "Bold artistic style with vibrant colors and creative elements",
            "mood": "energetic and expressive",
        },
    },
    {
        "name": "Minimalist Clean",
        "style_prompt": (
            "minimalist clean style, simple design, plenty of white space, elegant simplicity, "
            "modern minimal aesthetic"
        ),
        "ai_style_data": {
            "description": "Simple, clean minimalist aesthetic with plenty of white space",
            "mood": "serene and refined",
        },
    },
    {
        "name": "Vintage Retro",
        "style_prompt": (
            "vintage retro style, nostalgic aesthetic, classic design elements, retro color palette, "
            "timeless appeal"
        ),
        "ai_style_data": {
            "description": "Nostalgic vintage style with retro color palettes and classic design elements",
            "mood": "nostalgic and warm",
        },
    },
]

DEFAULT_MEDIA_ADAPTERS: List[Dict[str, Any]] = [
    {
        "name": "Photography",
        "description": "Grounded, realistic imagery using light, material, and framing as primary metaphors.",
        "vocabulary_adjustments": (
            "VOCABULARY: Focus on optical capture, natural light, and exposure balance. Use camera-specific "
            "terms when describing technical aspects. Avoid digital illustration or 3D rendering terminology."
        ),
        "lighting_adjustments": (
            "LIGHTING: Real-world softbox or daylight with warm/cool tone control and natural shadow falloff. "
            "Reference photographic light sources and their characteristics.\n"
            "SURFACES: Tactile realism with organic reflections and material texture. Materials should appear "
            "as they would under camera capture.\n"
            "COLOR: Balanced color grade with authentic tones and moderate contrast.\n"
            "FINISHING: Gentle S-curve, light film grain, subtle vignette for photographic aesthetic."
        ),
        "surface_adjustments": (
            "Surfaces must exhibit tactile realism with organic reflections. Focus on how camera sensors "
            "capture material properties: subsurface scattering for translucent materials, specular highlights "
            "on glossy surfaces, diffuse reflection on matte surfaces."
        ),
        "conceptual_adjustments": (
            "COMPOSITION: Rule-of-thirds or central framing with moderate layout density and controlled "
            "negative space. Foreground/mid/background separation with optical depth of field for subject "
            "emphasis.\n"
            "CONCEPTS: Real objects, lighting setups, and props as visual metaphors. Generate subjects that can "
            "be physically photographed or staged. Single or paired objects in real environments.\n"
            "REALISM: Realistic\n"
            "AVOID: Floating objects, impossible reflections, 3D stylization, illustration effects."
        ),
        "is_default": True,
    },
    {
        "name": "Illustration",
        "description": "Stylized 2D artwork using color, shape, and simplification for conceptual clarity.",
        "vocabulary_adjustments": (
            "VOCABULARY: Focus on graphic forms, vector lighting, and symbolic color fields. Use illustration "
            "and design terminology. Avoid photographic or 3D rendering terms."
        ),
        "lighting_adjustments": (
            "LIGHTING: Flat or simplified lighting with stylized highlights. Light can be symbolic and "
            "non-physical.\n"
            "SURFACES: Smooth fills, clean edges, minimal gradients.\n"
            "COLOR: Vivid palette with clear value separation for graphic impact.\n"
            "FINISHING: Crisp export finish with no grain or photographic texture."
        ),
        "surface_adjustments": (
            "Surfaces use smooth color fills with clean vector edges. Minimal gradients, flat rendering, "
            "simplified shading. Focus on graphic clarity over physical accuracy."
        ),
        "conceptual_adjustments": (
            "COMPOSITION: Flat orthographic or minimal isometric perspective. Sparse layout with generous "
            "negative space. Flat or shallow layered depth with separation via scale and color contrast.\n"
            "CONCEPTS: Geometric or symbolic abstractions as visual metaphors. Single or paired flat forms with "
            "conceptual meaning.\n"
            "REALISM: Stylized\n"
            "AVOID: Realistic textures, complex lighting, photographic realism, depth of field."
        ),
        "is_default": False,
    },
    {
        "name": "3D Render",
        "description": (
            "Physically based, dimensional imagery using materials and lighting for realism or stylized depth."
        ),
        "vocabulary_adjustments": (
            "VOCABULARY: Focus on rendering materials, light reflections, and cinematic tone. Use 3D rendering "
            "and CGI terminology. Reference PBR workflows and render engines when appropriate."
        ),
        "lighting_adjustments": (
            "LIGHTING: Area and rim lights, volumetric depth, directional glow. Reference three-point lighting, "
            "HDRI environments, and technical lighting setups.\n"
            "SURFACES: Matte, glossy, translucent, or emissive surfaces with physically-based material "
            "properties.\n"
            "COLOR: Balanced palette with luminous accents.\n"
            "FINISHING: Post-render tone mapping, soft bloom, high clarity for polished CGI aesthetic."
        ),
        "surface_adjustments": (
            "Surfaces use PBR shader properties: metallic/roughness workflows, IOR (index of refraction), "
            "normal/bump mapping, displacement. Specify technical material values when relevant."
        ),
        "conceptual_adjustments": (
            "COMPOSITION: Isometric, oblique, or cinematic camera perspectives. Moderate layout density with "
            "sculpted negative space. Layered objects with parallax depth. Depth of field or lighting-driven "
            "emphasis.\n"
            "CONCEPTS: Abstract object metaphors using material properties. Generate clean geometric forms, "
            "product visualization, architectural elements, impossible objects. Single or paired geometric "
            "subjects.\n"
            "REALISM: Stylized physical realism\n"
            "AVOID: Flat 2D elements, photographic props, hand-drawn textures, text overlays."
        ),
        "is_default": False,
    },
    {
        "name": "Product/UI Design",
        "description": (
            "Digital interface or data visualization imagery emphasizing clarity, hierarchy, and dimensional "
            "layering."
        ),
        "vocabulary_adjustments": (
            "VOCABULARY: Focus on interface elements, depth cues, and layered translucency. Use UI/UX and "
            "product design terminology. Avoid artistic or photographic descriptors."
        ),
        "lighting_adjustments": (
            "LIGHTING: Subtle gradient lighting for depth separation without dramatic shadows.\n"
            "SURFACES: Smooth panels with soft highlights and shadows for dimensional clarity.\n"
            "COLOR: Controlled palette with accent hues for visual focus and hierarchy.\n"
            "FINISHING: Clean compositing with minimal bloom or grain. Emphasis on clarity and readability."
        ),
        "surface_adjustments": (
            "Surfaces are pristine panels with soft edge highlights. Modern glass/frosted effects, subtle "
            "elevation shadows. Clean, professional finish with perfect edges."
        ),
        "conceptual_adjustments": (
            "COMPOSITION: Isometric or frontal pseudo-3D perspective. Dense modular grid layout. Stacked panels "
            "with clear z-index logic. Layer prominence via lighting contrast.\n"
            "CONCEPTS: Data and UI metaphors: windows, dashboards, charts, signals, interface panels. Multiple "
            "layered panels or singular interface views.\n"
            "REALISM: Digital semi-realism\n"
            "AVOID: Organic textures, real-world props, human figures, photographic elements."
        ),
        "is_default": False,
    },
]

DEFAULT_USERS: List[Dict[str, str]] = [
    {"email": "test@example.com", "password": "password123", "role": UserRole.USER.value},
    {"email": "admin@example.com", "password": "admin123", "role": UserRole.ADMIN.value},
]


async def seed_defaults(session: AsyncSession) -> Dict[str, int]:
    """Insert the default styles, media adapters and demo users.

    Args:
        session: Async SQLModel Session

    Returns:
        Number of rows created per group
    """
    created = {"styles": 0, "media_adapters": 0, "users": 0}

    style_repo = ImageStyleRepository(session)
    if not await style_repo.list(limit=1):
        for style in DEFAULT_STYLES:
            await style_repo.create(ImageStyle(**style))
            created["styles"] += 1
        logger.info(f"Seeded {created['styles']} default image styles")

    adapter_repo = MediaAdapterRepository(session)
    if not await adapter_repo.list(limit=1):
        for adapter in DEFAULT_MEDIA_ADAPTERS:
            await adapter_repo.create(MediaAdapter(**adapter))
            created["media_adapters"] += 1
        logger.info(f"Seeded {created['media_adapters']} default media adapters")

    user_repo = UserRepository(session)
    if await user_repo.count() == 0:
        for user in DEFAULT_USERS:
            await user_repo.create(
                User(email=user["email"], password=hash_password(user["password"]), role=user["role"])
            )
            created["users"] += 1
            logger.info(f"Created demo user: {user['email']} ({user['role']})")

    return created
