# cli.py
import argparse
import logging
import sys
import time
from pathlib import Path

from sortquiz.config import MAX_SIZE, MIN_SIZE, QuizSettings
from sortquiz.dispatcher import ALGORITHM_DISPATCH_TABLE, QuizSession
from sortquiz.errors import InvalidAction
from sortquiz.sort.base import COMPARE, PLACE
from sortquiz.tracegen import export_traces
from sortquiz.validate import validate_svl_file

logger = logging.getLogger(__name__)

CARD_MARKERS = {
    "idle": " {} ",
    "compare": "[{}]",
    "sorted": "*{}*",
    "key_element": "^{}^",
    "clickable": "<{}>",
    "placeholder": " _ ",
}


def setup_logging(level="WARNING", log_file=None):
    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format='%(asctime)s %(levelname)s: %(message)s',
        handlers=handlers,
        force=True,
    )


def render_prompt(prompt, out=sys.stdout):
    """Draw the cards and, while placing, the numbered insertion slots."""
    cards = [CARD_MARKERS.get(state, " {} ").format(value)
             for value, state in zip(prompt.values, prompt.states)]
    print("  ".join(cards), file=out)
    print("  ".join(f"{i:^{len(c)}}" for i, c in enumerate(cards)), file=out)
    if prompt.phase == PLACE:
        for slot in prompt.eligible:
            where = (f"before {prompt.values[slot]}" if slot < len(prompt.values) and slot in prompt.settled
                     else "after the sorted region")
            print(f"  slot {slot}: {where}", file=out)
    print(prompt.message, file=out)


def parse_action(raw, prompt):
    """Translate a typed command into an engine action; None when it is not one."""
    text = raw.strip().lower()
    if prompt.phase == COMPARE:
        if text in ("s", "swap"):
            return "swap"
        if text in ("k", "n", "skip", "next"):
            return "skip"
        return None
    try:
        value = int(text)
    except ValueError:
        return None
    return value if value in prompt.eligible else None


def play(args):
    settings = QuizSettings.from_mapping(vars(args))
    session = QuizSession(settings, pacer=time.sleep if not args.no_delay else None)
    prompt = session.start(args.algorithm)
    help_text = ("Commands: s=swap, k=skip, h=hint, r=restart, q=quit" if prompt.phase == COMPARE
                 else "Commands: <index or slot>, h=hint, r=restart, q=quit")
    print(f"{session.algorithm.title} ({settings.order.value}, converging {session.convergence.value})")
    print(help_text)

    while True:
        render_prompt(prompt)
        if prompt.is_complete:
            print(f"Finished in {session.steps} steps with {session.mistakes} mistakes.")
            return 0
        try:
            raw = input("> ")
        except EOFError:
            return 1
        command = raw.strip().lower()
        if command in ("q", "quit"):
            session.end()
            return 1
        if command in ("r", "restart"):
            prompt = session.restart()
            continue
        if command in ("h", "hint"):
            hint = session.hint()
            print(f"Hint: {getattr(hint, 'value', hint)}")
            continue

        action = parse_action(raw, prompt)
        if action is None:
            print(f"Not a valid choice here. {help_text}")
            continue
        try:
            outcome = session.submit(action)
            print(outcome.message)
        except InvalidAction as e:
            print(e.message)
        prompt = session.prompt


def export(args):
    settings = QuizSettings.from_mapping(vars(args))
    written = export_traces(args.output_file, args.algorithms, args.count, settings, args.seed)
    print(f"Wrote {written} traces to {args.output_file}")
    return 0 if written else 1


def validate(args):
    results = [validate_svl_file(path, args.schema) for path in args.files]
    print(f"Total: {len(results)} files, Success: {sum(results)}, Failed: {len(results) - sum(results)}.")
    return 0 if all(results) else 1


def build_parser():
    parser = argparse.ArgumentParser(prog="sortquiz", description="Step-by-step sorting algorithm quizzes")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_policy_args(p):
        p.add_argument("--size", type=int, default=MIN_SIZE,
                       help=f"Array size, clamped to [{MIN_SIZE}, {MAX_SIZE}]")
        p.add_argument("--order", default="asc", choices=["asc", "desc"])
        p.add_argument("--converge", dest="convergence", default=None, choices=["left", "right"],
                       help="Side the sorted region grows from (default: per algorithm)")

    p_play = sub.add_parser("play", help="Play a quiz in the terminal")
    p_play.add_argument("algorithm", choices=sorted(ALGORITHM_DISPATCH_TABLE) + ["bubble", "insertion", "selection"])
    add_policy_args(p_play)
    p_play.add_argument("--no-delay", action="store_true", help="Do not pause after accepted steps")
    p_play.set_defaults(func=play)

    p_export = sub.add_parser("export", help="Export auto-played SVL traces as JSONL")
    p_export.add_argument("-o", "--output_file", default="quiz_traces/traces.jsonl")
    p_export.add_argument("--algorithms", nargs="+", default=sorted(ALGORITHM_DISPATCH_TABLE))
    p_export.add_argument("--count", type=int, default=10, help="Sessions per algorithm")
    p_export.add_argument("--seed", type=int, default=None)
    add_policy_args(p_export)
    p_export.set_defaults(func=export)

    p_validate = sub.add_parser("validate", help="Validate SVL 5.0 JSON files")
    p_validate.add_argument("files", nargs="+")
    p_validate.add_argument("--schema", default=None, help="Schema file (defaults to the built-in schema)")
    p_validate.set_defaults(func=validate)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    logger.info("Args: %s", vars(args))
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
