"""
Console entry point: a textual menu to pick a sample, then the run echoes to stdout.
"""

import sys
from typing import Optional, Union

from dotenv import load_dotenv
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Static

from ..core.config import SampleVariant, Settings
from ..core.errors import ConfigurationError
from ..core.pipeline import run_sample
from ..util.logging import logger

QUIT = "quit"

MenuChoice = Union[SampleVariant, str]


class CommandScreen(Screen):
    """Top-level command menu."""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("Enter a command", classes="title"),
            Button("Choose sample", id="choose-sample", variant="primary"),
            Button("Quit", id="quit", variant="error"),
            Static("Q to quit", classes="hint"),
            id="menu-container",
        )
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "choose-sample":
            self.app.push_screen(SampleScreen())
        elif event.button.id == "quit":
            self.app.exit(QUIT)


class SampleScreen(Screen):
    """Sample chooser: hosted or local backend."""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("Choose a sample", classes="title"),
            *[Button(variant.title, id=f"sample-{variant.value}", variant="success") for variant in SampleVariant],
            Static("ESC to go back", classes="hint"),
            id="menu-container",
        )
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("sample-"):
            self.app.exit(SampleVariant(button_id[len("sample-"):]))


class SampleMenuApp(App[MenuChoice]):
    """Menu application. run() returns the chosen SampleVariant, QUIT or None."""

    CSS = """
    .title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
        color: cyan;
    }

    .hint {
        text-align: center;
        margin-top: 1;
        color: gray;
        text-style: italic;
    }

    #menu-container {
        width: 50;
        height: auto;
        align: center middle;
        padding: 1;
        border: solid white;
    }

    Button {
        width: 100%;
        margin-bottom: 1;
    }
    """

    TITLE = "RAG Samples"

    BINDINGS = [
        ("q", "quit_menu", "Quit"),
        ("escape", "back", "Back"),
    ]

    def on_mount(self) -> None:
        self.push_screen(CommandScreen())

    def action_quit_menu(self) -> None:
        self.exit(QUIT)

    def action_back(self) -> None:
        if isinstance(self.screen, SampleScreen):
            self.pop_screen()


def choose(app_factory=SampleMenuApp) -> Optional[MenuChoice]:
    """Show the menu once and return the selection."""
    return app_factory().run()


def main() -> int:
    """Menu loop: run the chosen sample, then show the menu again until Quit."""
    load_dotenv()
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"❌ {e}")
        return 1
    logger.configure(settings.log_level)

    issues = settings.validate()
    if issues:
        for issue in issues:
            print(f"❌ {issue}")
        return 1

    source = settings.configuration_source()

    while True:
        choice = choose()
        if choice is None or choice == QUIT:
            return 0

        variant = SampleVariant(choice)
        try:
            run_sample(variant, settings, source)
        except ConfigurationError as e:
            print(f"❌ {e}")
            logger.error(f"Sample '{variant.title}' aborted on configuration: {e}")
            return 1
        except KeyboardInterrupt:
            print(f"\nℹ️  Sample '{variant.title}' interrupted")
        except Exception as e:
            print(f"❌ Sample '{variant.title}' failed: {e}")
            logger.error(f"Sample '{variant.title}' failed: {type(e).__name__}: {e}")


if __name__ == "__main__":
    sys.exit(main())
