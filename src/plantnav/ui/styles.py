"""CSS for the plantnav app and its dialogs."""

APP_CSS = """
#plant-table {
    height: 1fr;
}

#status-bar {
    dock: bottom;
    height: 1;
    padding: 0 1;
    background: $boost;
}

#status-bar.loading {
    background: $warning-darken-1;
    text-style: italic;
}

.fullscreen Header, .fullscreen Footer, .fullscreen #status-bar {
    display: none;
}
"""


def dialog_css(screen: str, width: int | str = 64) -> str:
    """CSS that centers a ``#dialog`` box on the modal screen ``screen``."""
    return f"""
{screen} {{
    align: center middle;
    background: $background 60%;
}}

{screen} #dialog {{
    width: {width};
    height: auto;
    max-height: 90%;
    padding: 1 2;
    border: round $accent;
    background: $panel;
}}

{screen} #title {{
    width: 100%;
    content-align: center middle;
    text-style: bold;
    color: $accent;
}}

{screen} .section {{
    margin-top: 1;
    text-style: bold underline;
}}

{screen} #hint {{
    margin-top: 1;
    color: $text-muted;
}}
"""
