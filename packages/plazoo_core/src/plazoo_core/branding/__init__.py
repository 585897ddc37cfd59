"""
Tenant branding: color transforms and scoped theme variables.
"""

from plazoo_core.branding.colors import contrast_color, hex_to_hsl, normalize_hex
from plazoo_core.branding.theme import StyleBag, ThemeScope, ThemeSink, branding_variables

__all__ = [
    "contrast_color",
    "hex_to_hsl",
    "normalize_hex",
    "StyleBag",
    "ThemeScope",
    "ThemeSink",
    "branding_variables",
]
