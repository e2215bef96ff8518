import argparse
import logging
import sys
import threading

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from dictionary import load_dictionary
from errors import InvalidFeedbackError, InvariantViolation, UnknownWordError
from feedback import WORD_LENGTH, Correctness, GuessRecord, parse_feedback
from guesser import Guesser
from settings import load_settings

logger = logging.getLogger(__name__)


def parse_history(history):
    """
    Convert the wire shape
        [{"word": "tares", "mask": ["wrong", "misplaced", ...]}, ...]
    into GuessRecords.
    """
    records = []
    for item in history:
        try:
            word = str(item["word"]).strip().lower()
            mask = item["mask"]
            mask_length = len(mask)
        except (KeyError, TypeError):
            raise InvalidFeedbackError(f"Malformed guess entry: {item!r}") from None
        if len(word) != WORD_LENGTH:
            # the first word must be a dictionary word, which this cannot be
            if not records:
                raise UnknownWordError(word)
            raise InvalidFeedbackError(f"Guess {word!r} is not {WORD_LENGTH} letters long")
        if mask_length != WORD_LENGTH:
            raise InvalidFeedbackError(f"Mask for {word!r} needs {WORD_LENGTH} entries, got {mask_length}")
        records.append(GuessRecord(word, tuple(Correctness.from_name(c) for c in mask)))
    return records


class SolverApp:
    """Holds the current session; play and reset are serialized by a lock."""

    def __init__(self, settings=None):
        self.settings = settings if settings is not None else load_settings()
        self.dictionary = load_dictionary(self.settings)
        self._lock = threading.Lock()
        self._guesser = self._new_guesser()

    def _new_guesser(self):
        return Guesser(
            self.dictionary,
            hard_mode=self.settings["hard_mode"],
            opening_word=self.settings["opening_word"],
            top_n=self.settings["top_n"],
            pattern_data=self.settings["pattern_data"],
        )

    @property
    def guesser(self):
        return self._guesser

    def play(self, history):
        records = parse_history(history)
        with self._lock:
            suggestions = self._guesser.guess(records)
        return [{"word": s.word, "score": s.score} for s in suggestions]

    def reset(self):
        with self._lock:
            self._guesser = self._new_guesser()


# -----------------
# Console front end
# -----------------
HELP = (
    "Enter [bold]<guess> <feedback>[/bold], feedback as the letter for a correct spot, "
    "'-' for misplaced, '+' for absent (e.g. [cyan]tares +-a++[/cyan]).\n"
    "[bold]reset[/bold] starts over, [bold]quit[/bold] exits."
)


def suggestions_table(suggestions):
    table = Table(title="Suggestions")
    table.add_column("#", justify="right")
    table.add_column("word", style="bold magenta")
    table.add_column("score", justify="right")
    for i, s in enumerate(suggestions, 1):
        table.add_row(str(i), s["word"], f"{s['score']:.4f}")
    return table


def run_console(app, console):
    history = []
    console.print(HELP)
    console.print(suggestions_table(app.play(history)))

    while True:
        try:
            line = console.input("[bold magenta]Your guess[/bold magenta]: ").strip().lower()
        except EOFError:
            return
        if not line:
            continue
        if line in ("quit", "exit"):
            return
        if line == "reset":
            app.reset()
            history = []
            console.print("[bold green]Game restarted![/bold green]")
            console.print(suggestions_table(app.play(history)))
            continue

        parts = line.split()
        if len(parts) != 2:
            console.print("[red]Expected a guess and its feedback[/red]")
            continue
        word, feedback_str = parts
        try:
            mask = parse_feedback(word, feedback_str)
        except InvalidFeedbackError as e:
            console.print(f"[red]{e}[/red]")
            continue

        entry = {"word": word, "mask": [c.name.lower() for c in mask]}
        try:
            suggestions = app.play(history + [entry])
        except UnknownWordError as e:
            console.print(f"[red]{e}[/red]")
            continue
        history.append(entry)
        console.print(suggestions_table(suggestions))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Suggest the next Wordle guess.")
    parser.add_argument("--config", help="path to a YAML config file")
    parser.add_argument("--hard", action="store_true", default=None,
                        help="only suggest words that can still be the answer")
    args = parser.parse_args(argv)

    settings = load_settings(args.config, hard_mode=args.hard)
    logging.basicConfig(level=settings["log_level"], format="%(message)s",
                        datefmt="[%X]", handlers=[RichHandler()])

    console = Console()
    try:
        run_console(SolverApp(settings), console)
    except InvariantViolation as e:
        logger.error("Solver state is inconsistent: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
