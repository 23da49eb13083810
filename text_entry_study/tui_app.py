# tui_app.py — Text Entry Study TUI Application
# -------------------------------------------------------
# Terminal front end hosting one StudySession.
# Features:
#  - Consent screen: participant name + choice of starting method
#  - Phrase display with practice/test label
#  - Numbered suggestion chips in the predictive block
#  - Digits 1–9 accept a suggestion, Enter submits the phrase
#  - Input locked once both blocks are done and the log is exported
# -------------------------------------------------------

from __future__ import annotations

from typing import Callable, List, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.reactive import reactive
from textual.widgets import Button, Footer, Header, Input, Static

from text_entry_study.core.errors import ConsentRequired, ExportError, StudyError
from text_entry_study.core.study import StudySession
from text_entry_study.corpus import load_phrases
from text_entry_study.export import DirectorySink
from text_entry_study.utils.config_manager import Config
from text_entry_study.utils.logger_utils import Log


class SuggestionPanel(Static):
    """
    Row of suggestion chips under the input.
    Shows up to 9 predictions with their digit shortcut.
    """

    def update_predictions(self, predictions: List[str]) -> None:
        if not predictions:
            self.update("")
            return
        chips = [f"[b]({i})[/b] [cyan]{word}[/cyan]" for i, word in enumerate(predictions, 1)]
        self.update("   ".join(chips))


class PhraseInput(Input):
    """
    Input that hands digit keys to the study before they are typed.
    A digit only becomes a selection when a suggestion sits at that position,
    otherwise it is inserted as normal text.
    """

    async def _on_key(self, event: events.Key) -> None:
        app = self.app
        if (
            event.character
            and event.character in "123456789"
            and isinstance(app, StudyApp)
            and app.select_suggestion(int(event.character), self)
        ):
            event.stop()
            event.prevent_default()


# Main Application -----------------------------------------------------------------
class StudyApp(App):
    """
    The main Textual app.
    Architecture:
     - UI events to StudySession
     - StudySession messages/suggestions to reactive state
     - reactive state to UI updates
    """

    CSS = """
    #start { padding: 1 2; }
    #experiment { display: none; padding: 1 2; }
    #phrase { height: 3; content-align: left middle; text-style: bold; }
    #suggestions { height: 2; }
    #buttons Button { margin-right: 2; }
    """

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    message_text = reactive("")  # what the phrase display shows
    suggestions = reactive(list)  # current suggestion list

    def __init__(
        self,
        config: Optional[Config] = None,
        phrases: Optional[List[str]] = None,
        logger: Optional[Log] = None,
    ):
        super().__init__()
        self.cfg = config or Config()
        self.ui_ready = False
        self.study_log = logger or Log(echo=False)
        corpus = phrases if phrases is not None else load_phrases(self.cfg["phrases_file"])
        self.session = StudySession(
            corpus,
            self.cfg,
            consent_sink=DirectorySink(self.cfg["export_dir"]),
            scheduler=self.schedule_pacing,
            on_message=self._on_study_message,
            logger=self.study_log,
        )

    # UI --------------------------------------------------------------------
    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="start"):
            yield Static("[b]Text Entry Study[/b]\nType your name to sign the consent form.")
            yield Input(placeholder="Participant name", id="participant")
            with Horizontal(id="buttons"):
                yield Button("Start with QWERTY", id="start-qwerty", variant="primary")
                yield Button("Start with Predictive", id="start-predictive")
            yield Static(id="notice")
        with Container(id="experiment"):
            yield Static(id="phrase")
            yield PhraseInput(placeholder="Type the phrase, Enter to submit", id="entry")
            yield SuggestionPanel(id="suggestions")
        yield Footer()

    def on_mount(self) -> None:
        """Once the UI exists, watchers may touch widgets."""
        self.ui_ready = True
        self.query_one("#participant", Input).focus()

    def schedule_pacing(self, delay: float, callback: Callable[[], None]) -> None:
        """Run `callback` after `delay` seconds; a zero delay continues on the next tick."""
        if delay <= 0:
            self.call_later(callback)
        else:
            self.set_timer(delay, callback)

    # Start screen ----------------------------------------------------------------
    def on_button_pressed(self, event: Button.Pressed) -> None:
        first = "qwerty" if event.button.id == "start-qwerty" else "predictive"
        name = self.query_one("#participant", Input).value
        notice = self.query_one("#notice", Static)
        try:
            self.session.try_start(name, first)
        except ConsentRequired as e:
            notice.update(f"[yellow]{e}[/yellow]")
            return
        except StudyError as e:
            notice.update(f"[red]{e}[/red]")
            return

        self.query_one("#start").display = False
        self.query_one("#experiment").display = True
        self.query_one("#entry", PhraseInput).focus()

    # Typing ---------------------------------------------------------------------
    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "entry":
            return
        self.suggestions = self.session.edit(event.value, event.input.cursor_position)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "entry":
            return
        try:
            self.session.commit(event.value)
        except ExportError as e:
            self.notify(f"Log export failed: {e}", severity="error", timeout=30)
        if self.session.finished:
            event.input.disabled = True

    def select_suggestion(self, digit: int, entry: Input) -> bool:
        """Apply suggestion `digit`; False when there is nothing to select."""
        self.session.edit(entry.value, entry.cursor_position)
        selection = self.session.press_digit(digit)
        if selection is None:
            return False
        entry.value = selection.text
        entry.cursor_position = selection.cursor
        self.suggestions = []
        return True

    # Reactive state (watcher functions) ---------------------------------------
    def watch_suggestions(self, suggestions: List[str]) -> None:
        if self.ui_ready:
            self.query_one(SuggestionPanel).update_predictions(suggestions)

    def watch_message_text(self, text: str) -> None:
        if self.ui_ready:
            self.query_one("#phrase", Static).update(text)

    # StudySession hooks ---------------------------------------------------------
    def _on_study_message(self, text: str) -> None:
        self.message_text = text
        if not self.ui_ready:
            return
        entry = self.query_one("#entry", PhraseInput)
        # a new trial or block always starts from an empty box
        entry.value = ""
        self.suggestions = []
        if self.session.finished:
            entry.disabled = True


def main(config: Optional[Config] = None, phrases: Optional[List[str]] = None) -> None:
    StudyApp(config, phrases).run()


if __name__ == "__main__":
    main()
