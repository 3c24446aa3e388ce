import pytest

from core.event_system import EventBus, EventType, GameEvent
from core.grammar import ParseError, ParseErrorKind
from ui.crt_effects import CRTOutput
from ui.message_reporter import MessageReporter, describe_error, emit_message, emit_warning


@pytest.fixture
def crt():
    output = CRTOutput()
    output.start_capture()
    return output


@pytest.fixture
def reporter(session, crt):
    reporter = MessageReporter(crt, bus=session.bus, vocabulary=session.vocabulary)
    yield reporter
    reporter.cleanup()


class TestDescribeError:

    def test_ambiguous_lists_candidates(self, parse):
        error = parse("take lamp")

        assert describe_error(error) == "Which lamp do you mean, the brass lamp or the broken lamp?"

    def test_object_not_found(self, parse):
        assert describe_error(parse("take KNIFE")) == "You can't see any knife here!"

    def test_bare_preposition(self, parse):
        assert describe_error(parse("put lamp in")) == "In what?"

    def test_no_verb(self, parse):
        assert describe_error(parse("lamp")) == "There was no verb in that sentence!"

    def test_unknown_word_with_suggestion(self, parse, vocabulary):
        text = describe_error(parse("take brass lanturn"), vocabulary)

        assert text.startswith('I don\'t know the word "lanturn".')
        assert 'Did you mean "lantern"?' in text

    def test_no_suggestion_for_known_word(self, parse, vocabulary):
        text = describe_error(parse("take knife"), vocabulary)

        assert "Did you mean" not in text

    def test_unlisted_detail_falls_back_to_kind(self):
        error = ParseError(ParseErrorKind.INVALID_SYNTAX, "something-new")

        assert describe_error(error) == "That sentence isn't one I recognize."


class TestReporter:

    def test_pickup(self, session, reporter, crt):
        session.submit("take brass lamp")

        assert crt.stop_capture() == ["Taken: brass lamp."]

    def test_parse_failure(self, session, reporter, crt):
        session.submit("take lamp")

        assert crt.stop_capture() == ["Which lamp do you mean, the brass lamp or the broken lamp?"]

    def test_warning_prefix(self, session, reporter, crt):
        session.submit("west")

        assert crt.stop_capture() == ["[WARNING] You can't go that way."]

    def test_movement(self, session, reporter, crt):
        session.submit("east")

        assert crt.stop_capture() == ["KITCHEN", "A kitchen."]

    def test_put(self, session, reporter, crt):
        session.submit("put brass lamp in large box")

        assert crt.stop_capture() == ["You put the brass lamp in the large box."]

    def test_show_parse(self, session, reporter, crt):
        reporter.show_parse = True

        session.submit("put brass lamp in large box")

        assert crt.stop_capture()[0] == "[PARSE] verb=PUT direct=brass_lamp prep=IN indirect=large_box"

    def test_suggestions_can_be_disabled(self, session, reporter, crt):
        reporter.suggest_corrections = False

        session.submit("take brass lanturn")

        assert crt.stop_capture() == ['I don\'t know the word "lanturn".']

    def test_cleanup_unsubscribes(self, session, crt):
        reporter = MessageReporter(crt, bus=session.bus)
        assert session.bus.subscriber_count(EventType.MESSAGE) == 1

        reporter.cleanup()

        assert session.bus.subscriber_count(EventType.MESSAGE) == 0

    def test_emit_helpers(self, crt):
        bus = EventBus()
        reporter = MessageReporter(crt, bus=bus)

        emit_message("Hello.", bus=bus)
        emit_warning("Careful.", bus=bus)
        bus.emit(GameEvent(EventType.ERROR, {"text": "Broken."}))

        assert crt.stop_capture() == ["Hello.", "[WARNING] Careful.", "[ERROR] Broken."]
        reporter.cleanup()


class TestCRTOutput:

    def test_capture_strips_colors(self):
        crt = CRTOutput()
        crt.start_capture()

        crt.output("\033[1mBold\033[0m text")

        assert crt.stop_capture() == ["Bold text"]
        assert not crt.capture_mode

    def test_plain_output(self, capsys):
        crt = CRTOutput()
        crt.enabled = False

        crt.output("Hello")
        crt.warning("Watch out")

        assert capsys.readouterr().out == "Hello\n[!] Watch out\n"

    def test_unknown_palette_falls_back(self):
        crt = CRTOutput(palette="purple")

        assert crt.palette == "purple"
        assert "amber" in CRTOutput.get_available_palettes()

    def test_prompt(self):
        crt = CRTOutput()
        crt.enabled = False

        assert crt.prompt() == "> "
