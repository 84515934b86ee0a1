import argparse
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from promptfy.clipboard import ClipboardPublisher, SystemClipboard, find_clipboard_command
from promptfy.methodologies import METHODOLOGIES, FieldValidationError, get_methodology
from promptfy.utils import to_kebab_case

load_dotenv()

CLIPBOARD_COMMAND = os.getenv("PROMPTFY_CLIPBOARD_COMMAND", "").strip() or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptfy",
        description="Build AI coding assistant prompts from one of three methodologies.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for methodology in METHODOLOGIES.values():
        p = sub.add_parser(methodology.slug, help=methodology.summary)
        for spec in methodology.fields:
            help_text = spec.placeholder
            if spec.required:
                help_text += f" (required, at least {spec.min_length} characters)"
            p.add_argument(f"--{to_kebab_case(spec.name)}", dest=spec.name, default="", help=help_text)
        p.add_argument("--copy", action="store_true", help="Copy the prompt to the system clipboard")
        p.add_argument("--print", dest="print_prompt", action="store_true",
                       help="Print the prompt even when it was copied")

    serve = sub.add_parser("serve", help="Run the web app")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    return parser


def _serve(args) -> int:
    import uvicorn

    from promptfy.main import HOST, PORT, app

    uvicorn.run(app, host=args.host or HOST, port=args.port or PORT)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        return _serve(args)

    methodology = get_methodology(args.command)
    raw = {spec.name: getattr(args, spec.name) for spec in methodology.fields}

    try:
        prompt = methodology.build(raw)
    except FieldValidationError as e:
        for name, message in e.errors.items():
            print(f"--{to_kebab_case(name)}: {message}", file=sys.stderr)
        return 2

    copied = False
    if args.copy:
        publisher = ClipboardPublisher(SystemClipboard(find_clipboard_command(CLIPBOARD_COMMAND)))
        copied = publisher.publish(prompt)
        if copied:
            print("✅ Prompt copied to clipboard.", file=sys.stderr)

    if not copied or args.print_prompt:
        print(prompt)

    return 0


if __name__ == "__main__":
    sys.exit(main())
