"""
Main entry point for Lingua Drills.

Runs an interactive, line-oriented drill session over a generated level
deck: flip cards, type what you hear, or read the sentence aloud.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .alignment.word_aligner import display_words
from .audio.reference import AudioPlayer, NullAudioPlayer, WavFilePlayer
from .config import Config
from .content.deck import load_deck
from .content.quiz import QuizSession
from .drills.session import DrillSession
from .errors import DeckValidationError, InputValidationError, error_handler
from .i18n import Translator
from .models import DictationStatus, DrillMode, MatchClass, QuizQuestion
from .progress import DrillProgressTracker
from .speech.capability import register_capability, unregister_capability
from .speech.console import ConsoleSpeechCapture


MODE_LABELS = {
    DrillMode.VIEW: "view_mode",
    DrillMode.DICTATION: "drill_mode",
    DrillMode.PRONUNCIATION: "speech_mode",
}

MATCH_MARKERS = {
    MatchClass.EXACT: "+",
    MatchClass.CLOSE: "~",
    MatchClass.MISMATCH: "x",
}

COMMANDS_HELP = (
    ":n next  :p previous  :f flip  :m view|dictation|pronunciation  "
    ":r replay  :s speak  :x exam  :q quit"
)


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


class DrillConsole:
    """Line-oriented front end driving a DrillSession."""

    def __init__(
        self,
        session: DrillSession,
        translator: Translator,
        capture: Optional[ConsoleSpeechCapture] = None,
        questions: Optional[List[QuizQuestion]] = None,
        stdin: TextIO = None,
        stdout: TextIO = None
    ):
        self.session = session
        self.translator = translator
        self.capture = capture
        self.questions = questions or []
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def say(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def render(self) -> None:
        """Print the current card in the active mode."""
        t = self.translator.t
        session = self.session
        card = session.current_card

        self.say()
        self.say(f"{t('card_of', {'current': session.index + 1, 'total': len(session.cards)})}"
                 f"  [{t(MODE_LABELS[session.mode])}]")

        if session.mode == DrillMode.VIEW:
            self.say(f"  {card.target_text}")
            if session.flipped:
                self.say(f"  {t('translation')}: {card.translation}")
                if card.pronunciation_hint:
                    self.say(f"  ({card.pronunciation_hint})")
            else:
                self.say(f"  {t('tap_meaning')}")

        elif session.mode == DrillMode.DICTATION:
            self.say(f"  {t('drill_instruction')}")
            status = session.dictation.status
            if status == DictationStatus.CORRECT:
                self.say(f"  {card.target_text}")
                self.say(f"  {t('perfect')}")
            elif status == DictationStatus.INCORRECT:
                self.say(f"  {t('try_again')}")

        else:
            self.render_pronunciation()

    def render_pronunciation(self) -> None:
        t = self.translator.t
        drill = self.session.pronunciation
        if not self.session.speech_available:
            self.say(f"  {t('speech_unavailable')}")
        if drill.listening:
            self.say(f"  {t('listening')}")
        if drill.awaiting_input:
            self.say(f"  {self.session.current_card.target_text}")
            self.say(f"  {t('speech_instruction')}")
            return

        words = display_words(self.session.current_card.target_text, drill.alignments)
        marked = " ".join(f"{shown}[{MATCH_MARKERS[a.match_class]}]" for shown, a in words)
        self.say(f"  {t('accuracy')}: {marked}")
        self.say(f"  \"{drill.transcript}\"")

    def handle(self, line: str) -> bool:
        """
        Handle one input line.

        Returns:
            False when the learner asked to quit
        """
        session = self.session
        command = line.strip()

        if command == ":q":
            return False
        if command == ":n":
            session.next_card()
        elif command == ":p":
            session.prev_card()
        elif command == ":f":
            session.flip()
        elif command.startswith(":m"):
            self.switch_mode(command[2:].strip())
        elif command == ":r":
            if not session.play_reference_audio():
                self.say("  (no reference audio)")
        elif command == ":s":
            self.speak()
        elif command == ":x":
            self.run_exam()
        elif command == ":h":
            self.say(COMMANDS_HELP)
        elif session.mode == DrillMode.DICTATION:
            if not session.dictation.locked:
                session.type_input(line.rstrip("\n"))
            session.submit_dictation()
        elif session.mode == DrillMode.VIEW and not command:
            session.flip()
        else:
            self.say(COMMANDS_HELP)
        return True

    def switch_mode(self, name: str) -> None:
        try:
            mode = DrillMode(name)
        except ValueError:
            self.say(f"  Unknown mode '{name}'. Choose view, dictation or pronunciation.")
            return
        self.session.set_mode(mode)

    def speak(self) -> None:
        if self.session.mode != DrillMode.PRONUNCIATION:
            self.session.set_mode(DrillMode.PRONUNCIATION)
        if self.session.toggle_listening() and self.capture is not None:
            self.capture.pump()
        error = self.session.pronunciation.last_error
        if error is not None:
            self.say(f"  {error.message}. {error.suggested_actions[0]}")

    def run_exam(self) -> None:
        """Take the level exam."""
        t = self.translator.t
        try:
            quiz = QuizSession(self.questions)
        except InputValidationError as e:
            self.say(f"  {e.processing_error.message}")
            return

        while True:
            question = quiz.current
            self.say()
            self.say(f"{t('question')} {quiz.index + 1}/{len(quiz.questions)}: {question.question}")
            for number, option in enumerate(question.options, start=1):
                self.say(f"  {number}. {option}")

            choice = self._read_choice(len(question.options))
            if choice is None:
                return
            correct = quiz.answer(choice)
            self.say("  ✅" if correct else f"  ❌ {question.options[question.correct_index]}")
            if question.explanation:
                self.say(f"  {t('explanation')}: {question.explanation}")

            if not quiz.next():
                break

        self.say()
        self.say(t('exam_complete'))
        self.say(t('you_got', {'score': quiz.score, 'total': len(quiz.questions)}))
        self.say(f"{quiz.percentage}% - {t(quiz.result_message_key())}")

    def _read_choice(self, option_count: int) -> Optional[int]:
        while True:
            self.stdout.write(f"  1-{option_count} > ")
            self.stdout.flush()
            line = self.stdin.readline()
            if not line or line.strip() == ":q":
                return None
            try:
                choice = int(line.strip()) - 1
            except ValueError:
                continue
            if 0 <= choice < option_count:
                return choice

    def run(self) -> None:
        """Read commands until quit or end of input."""
        self.say(COMMANDS_HELP)
        while True:
            self.render()
            self.stdout.write("> ")
            self.stdout.flush()
            line = self.stdin.readline()
            if not line or not self.handle(line):
                break
        self.session.stop_listening()


def build_player(audio_dir: Optional[Path]) -> AudioPlayer:
    """Write reference audio to WAV files when a directory is given."""
    if audio_dir is None:
        return NullAudioPlayer()
    return WavFilePlayer(audio_dir)


def build_capture(speech: str, stdin: TextIO, stdout: TextIO) -> Optional[ConsoleSpeechCapture]:
    """Register the console speech capability, or leave the host without one."""
    if speech != "console":
        unregister_capability("console")
        return None
    capture = ConsoleSpeechCapture(stdin, stdout)
    register_capability("console", lambda: capture)
    return capture


def print_error_summary() -> None:
    """Print recorded errors and warnings with a suggestion each."""
    if not (error_handler.has_errors() or error_handler.has_warnings()):
        return
    summary = error_handler.get_error_summary()
    print("\n" + "=" * 50)
    print("⚠️  ISSUES DETECTED")
    print("=" * 50)
    for entry in summary['errors'] + summary['warnings']:
        print(f"   • {entry['message']}")
        if entry['suggested_actions']:
            print(f"     Suggestion: {entry['suggested_actions'][0]}")


def main(argv: Optional[List[str]] = None, stdin: TextIO = None, stdout: TextIO = None) -> int:
    """Run the interactive drill CLI."""
    parser = argparse.ArgumentParser(
        description="Practise generated flashcards with typing and speaking drills",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s level.json
  %(prog)s level.json --mode dictation --audio-dir clips/
  %(prog)s level.json --mode pronunciation --language zh

Commands inside the session:
  """ + COMMANDS_HELP + """
  Any other line in dictation mode is your typed answer.
        """
    )

    parser.add_argument(
        "deck",
        type=Path,
        help="Level content JSON with a 'flashcards' list"
    )

    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in DrillMode],
        default=DrillMode.VIEW.value,
        help="Drill mode to start in"
    )

    parser.add_argument(
        "--language",
        choices=Config.SUPPORTED_LANGUAGES,
        default=Config.UI_LANGUAGE if Config.UI_LANGUAGE in Config.SUPPORTED_LANGUAGES else "en",
        help="Display language"
    )

    parser.add_argument(
        "--speech",
        choices=["console", "none"],
        default="console",
        help="Speech capture for the pronunciation drill ('console' reads typed utterances)"
    )

    parser.add_argument(
        "--audio-dir",
        type=Path,
        default=None,
        help="Write reference audio clips as WAV files to this directory"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    error_handler.clear_errors()

    try:
        deck = load_deck(args.deck)
    except DeckValidationError as e:
        error = e.processing_error
        print(f"❌ {error.message}: {error.details}")
        print("💡 Suggestions:")
        for action in error.suggested_actions:
            print(f"   • {action}")
        return 1

    capture = build_capture(args.speech, stdin, stdout)
    progress = DrillProgressTracker()
    session = DrillSession(
        deck.cards,
        speech_host=args.speech,
        player=build_player(args.audio_dir),
        progress=progress
    )
    session.set_mode(DrillMode(args.mode))

    logger.info(f"📚 {deck.level_name or deck.topic or args.deck.name}: {len(deck.cards)} cards")

    console = DrillConsole(
        session,
        Translator(args.language),
        capture=capture,
        questions=deck.questions,
        stdin=stdin,
        stdout=stdout
    )
    try:
        console.run()
    except KeyboardInterrupt:
        session.stop_listening()
        print("\n⚠️  Session interrupted")

    progress.log_summary()
    print_error_summary()
    return 0


if __name__ == "__main__":
    sys.exit(main())
