#!/usr/bin/env python3
# =============================================================================
# scripts/simplify_interactive.py - Explain Content in the Terminal
# =============================================================================
# Explains a file, a URL or pasted text, then answers follow-up questions.
# Nothing is saved to history.
#
# Usage:
#   python scripts/simplify_interactive.py report.pdf
#   python scripts/simplify_interactive.py https://example.com/article
#   python scripts/simplify_interactive.py                 # Paste text
#
# Commands:
#   /quit or /exit - Exit
#   /show          - Show the explanation again
#   /help          - Show help
# =============================================================================

import mimetypes
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from agents.simplifier import answer_followup, extract_and_simplify, is_url
from app.exceptions import SimplifierException
from core.services import FileService


def read_source(arg: str | None) -> tuple[str, str | None]:
    """Return (content, content_type) for a path, URL or pasted text."""
    if arg and is_url(arg):
        return arg, None

    if arg:
        path = Path(arg)
        data = path.read_bytes()
        mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        FileService.validate_upload(path.name, mime_type, len(data))
        processed = FileService.process_file(data, path.name, mime_type)
        print(f"Extracted text with: {processed.processing_method}")
        return processed.content, f"file:{mime_type}:{processed.processing_method}"

    print("Paste the text to explain, then an empty line:")
    lines = []
    for line in sys.stdin:
        if not line.strip():
            break
        lines.append(line.rstrip("\n"))
    return "\n".join(lines), None


def print_help():
    print("Ask any question about the explanation, or:")
    print("  /show  - show the explanation again")
    print("  /quit  - exit")


def main():
    arg = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        content, content_type = read_source(arg)
    except SimplifierException as e:
        print(f"ERROR: {e.message}")
        if e.suggestion:
            print(f"  Suggestion: {e.suggestion}")
        sys.exit(1)

    if not content.strip():
        print("Nothing to explain.")
        sys.exit(1)

    print("\nThinking...\n")
    try:
        result = extract_and_simplify(content, content_type=content_type)
    except SimplifierException as e:
        print(f"ERROR: {e.message}")
        sys.exit(1)

    def show():
        print("=" * 60)
        print(result.title)
        print("=" * 60)
        print(result.simplified)
        print()

    show()
    print_help()

    context = result.simplified if result.is_url else content

    while True:
        try:
            question = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not question:
            continue
        if question in ("/quit", "/exit"):
            break
        if question == "/show":
            show()
            continue
        if question == "/help":
            print_help()
            continue

        try:
            print(f"\n{answer_followup(context, question)}")
        except SimplifierException as e:
            print(f"ERROR: {e.message}")


if __name__ == "__main__":
    main()
