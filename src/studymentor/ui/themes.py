"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)
- Dark/light mode configuration

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Blue/indigo palette on a pale background
MENTOR_INDIGO = Theme(
    name="mentor-indigo",
    primary="#2563eb",      # Blue 600 - user bubbles, accents
    secondary="#4f46e5",    # Indigo 600 - chat header
    accent="#16a34a",       # Green 600 - mentor avatar
    foreground="#1f2937",   # Gray 800 - body text
    background="#eef2ff",   # Indigo 50 - page background
    success="#16a34a",
    warning="#d97706",
    error="#dc2626",
    surface="#ffffff",      # Cards
    panel="#f3f4f6",        # Gray 100 - mentor bubbles, input bar
    dark=False,
    variables={
        # Input styling
        "input-cursor-background": "#2563eb",
        "input-cursor-foreground": "#ffffff",
        "input-selection-background": "#2563eb 30%",

        # Border colors
        "border": "#d1d5db",
        "border-blurred": "#e5e7eb",

        # Scrollbar styling
        "scrollbar": "#c7d2fe",
        "scrollbar-hover": "#a5b4fc",
        "scrollbar-active": "#4f46e5",
        "scrollbar-background": "#eef2ff",
        "scrollbar-corner-color": "#eef2ff",

        # Footer styling
        "footer-foreground": "#374151",
        "footer-background": "#e0e7ff",
        "footer-key-foreground": "#4f46e5",
        "footer-key-background": "#c7d2fe",
        "footer-description-foreground": "#4b5563",

        # Text variants
        "text-muted": "#6b7280",
        "text-disabled": "#9ca3af",

        # Button styling
        "button-foreground": "#1f2937",
        "button-color-foreground": "#ffffff",
        "button-focus-text-style": "bold",
    },
)
