from __future__ import annotations

from typing import Any

from .documents import DocumentValidationError, Scalar, require_scalar

SRGB_PROFILE = "kCGColorSpaceSRGB"
GENERIC_GRAY_PROFILE = "kCGColorSpaceGenericGray"
GENERIC_CMYK_PROFILE = "kCGColorSpaceGenericCMYK"

RGB_PROFILES = (
    "kCGColorSpaceGenericRGB",
    "kCGColorSpaceGenericRGBLinear",
    SRGB_PROFILE,
    "kCGColorSpaceAdobeRGB1998",
)
GRAY_PROFILES = (GENERIC_GRAY_PROFILE, "kCGColorSpaceGenericGrayGamma2_2")


def make_rgbacolor(
    red: Scalar,
    green: Scalar,
    blue: Scalar,
    alpha: Scalar = 1.0,
    profile: str | None = None,
) -> dict[str, Any]:
    profile_name = SRGB_PROFILE if profile is None else _require_profile(profile, RGB_PROFILES)
    return {
        "red": require_scalar(red, "red"),
        "green": require_scalar(green, "green"),
        "blue": require_scalar(blue, "blue"),
        "alpha": require_scalar(alpha, "alpha"),
        "colorcolorprofilename": profile_name,
    }


def make_graycolor(gray: Scalar, alpha: Scalar = 1.0, profile: str | None = None) -> dict[str, Any]:
    profile_name = GENERIC_GRAY_PROFILE if profile is None else _require_profile(profile, GRAY_PROFILES)
    return {
        "gray": require_scalar(gray, "gray"),
        "alpha": require_scalar(alpha, "alpha"),
        "profile": profile_name,
    }


def make_cmykcolor(cyan: Scalar, magenta: Scalar, yellow: Scalar, black: Scalar) -> dict[str, Any]:
    return {
        "cyan": require_scalar(cyan, "cyan"),
        "magenta": require_scalar(magenta, "magenta"),
        "yellow": require_scalar(yellow, "yellow"),
        "cmykblack": require_scalar(black, "cmykblack"),
        "colorcolorprofilename": GENERIC_CMYK_PROFILE,
    }


def set_red_toequation(color: dict[str, Any], equation: str) -> dict[str, Any]:
    return _set_component_equation(color, "red", equation)


def set_green_toequation(color: dict[str, Any], equation: str) -> dict[str, Any]:
    return _set_component_equation(color, "green", equation)


def set_blue_toequation(color: dict[str, Any], equation: str) -> dict[str, Any]:
    return _set_component_equation(color, "blue", equation)


def set_alpha_toequation(color: dict[str, Any], equation: str) -> dict[str, Any]:
    return _set_component_equation(color, "alpha", equation)


def set_gray_toequation(color: dict[str, Any], equation: str) -> dict[str, Any]:
    return _set_component_equation(color, "gray", equation)


def _set_component_equation(color: dict[str, Any], component: str, equation: str) -> dict[str, Any]:
    if component not in color:
        raise DocumentValidationError(f"color has no {component} component")
    if not isinstance(equation, str):
        raise DocumentValidationError(f"{component} equation must be a string")
    color[component] = equation
    return color


def _require_profile(profile: str, allowed: tuple[str, ...]) -> str:
    if profile not in allowed:
        raise DocumentValidationError(f"unsupported color profile: {profile}")
    return profile
