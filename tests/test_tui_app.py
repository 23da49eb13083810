# tests/test_tui_app.py
# Pilot-driven checks of the Textual front end.

import asyncio

import pytest

from text_entry_study.cli import apply_run_options, build_parser
from text_entry_study.core.sequencer import Mode, Phase
from text_entry_study.tui_app import PhraseInput, StudyApp
from text_entry_study.utils.config_manager import Config


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "exports"


def make_app(out_dir, quiet_log, **overrides):
    settings = dict(export_dir=str(out_dir), phrases_per_block=1, intro_delay=0, transition_delay=0)
    settings.update(overrides)
    return StudyApp(Config(**settings), ["dog dad"], logger=quiet_log)


def run_app(app, scenario):
    async def _drive():
        async with app.run_test() as pilot:
            await scenario(pilot)

    asyncio.run(_drive())


async def sign_and_start(pilot, button="#start-predictive", name="Ada"):
    await pilot.press(*name)
    await pilot.click(button)
    await pilot.pause(0.1)


def test_app_mounts_on_the_consent_screen(out_dir, quiet_log):
    app = make_app(out_dir, quiet_log)

    async def scenario(pilot):
        assert app.ui_ready
        assert app.query_one("#start").display
        assert not app.query_one("#experiment").display
        assert app.session.phase is Phase.AWAITING_CONSENT

    run_app(app, scenario)


def test_start_without_name_stays_on_consent_screen(out_dir, quiet_log):
    app = make_app(out_dir, quiet_log)

    async def scenario(pilot):
        await pilot.click("#start-qwerty")
        await pilot.pause(0.1)
        assert not app.session.started
        assert app.query_one("#start").display
        assert not out_dir.exists()

    run_app(app, scenario)


def test_start_button_opens_first_trial(out_dir, quiet_log):
    app = make_app(out_dir, quiet_log)

    async def scenario(pilot):
        await sign_and_start(pilot, "#start-qwerty")
        assert app.session.phase is Phase.TRIAL
        assert app.session.active_mode is Mode.QWERTY
        assert app.query_one("#experiment").display
        assert isinstance(app.focused, PhraseInput)
        assert (out_dir / "consent_form_Ada.txt").exists()

    run_app(app, scenario)


def test_digit_selects_suggestion_in_predictive_block(out_dir, quiet_log):
    app = make_app(out_dir, quiet_log)

    async def scenario(pilot):
        await sign_and_start(pilot)
        await pilot.press("d", "2")
        await pilot.pause(0.1)
        entry = app.query_one("#entry", PhraseInput)
        assert entry.value == "dad "
        predictions = [e for e in app.session.event_log if e.type == "prediction"]
        assert len(predictions) == 1
        assert predictions[0].input == "d"
        assert predictions[0].selected == "dad"

    run_app(app, scenario)


def test_digit_without_suggestion_is_typed(out_dir, quiet_log):
    app = make_app(out_dir, quiet_log)

    async def scenario(pilot):
        await sign_and_start(pilot, "#start-qwerty")
        await pilot.press("d", "2")
        await pilot.pause(0.1)
        assert app.query_one("#entry", PhraseInput).value == "d2"
        assert len(app.session.event_log) == 0

    run_app(app, scenario)


def test_no_delay_run_reaches_trials(out_dir, quiet_log):
    args = build_parser().parse_args(["run", "--no-delay", "--out", str(out_dir)])
    cfg = apply_run_options(Config(phrases_per_block=1), args)
    assert cfg["intro_delay"] == 0.0
    assert cfg["transition_delay"] == 0.0
    app = StudyApp(cfg, ["dog dad"], logger=quiet_log)

    async def scenario(pilot):
        await sign_and_start(pilot)
        assert app.session.phase is Phase.TRIAL
        await pilot.press("d", "1")
        await pilot.pause(0.1)
        assert app.query_one("#entry", PhraseInput).value == "dog "

    run_app(app, scenario)


def test_pacing_delay_holds_the_intro(out_dir, quiet_log):
    app = make_app(out_dir, quiet_log, intro_delay=0.5)

    async def scenario(pilot):
        await pilot.press(*"Ada")
        await pilot.click("#start-predictive")
        await pilot.pause()
        assert app.session.phase is Phase.BLOCK_INTRO
        await pilot.pause(1.0)
        assert app.session.phase is Phase.TRIAL

    run_app(app, scenario)


def test_input_disabled_after_both_blocks(out_dir, quiet_log):
    app = make_app(out_dir, quiet_log)

    async def scenario(pilot):
        await sign_and_start(pilot)
        await pilot.press("d", "2", "enter")
        await pilot.pause(0.2)
        assert app.session.active_mode is Mode.QWERTY
        assert app.session.phase is Phase.TRIAL
        await pilot.press("x", "enter")
        await pilot.pause(0.2)

        assert app.session.finished
        assert app.query_one("#entry", PhraseInput).disabled
        log_file = out_dir / "log_data_Ada.csv"
        assert log_file.exists()
        kinds = [e.type for e in app.session.event_log]
        assert kinds == ["prediction", "submission", "block_complete", "submission", "block_complete"]

    run_app(app, scenario)
