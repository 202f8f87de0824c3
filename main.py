"""Simple CLI entry point for the eBay Finding client.

Each line is an operation name followed by name=value pairs, e.g.

    findItemsByKeywords keywords="harry potter" itemFilter.name=MaxPrice itemFilter.value=20
"""

import asyncio
import shlex
from typing import Dict, Tuple

from ebay_finding import FindingClient, FindingError, get_operation
from ebay_finding.log import setup_logging


def parse_line(line: str) -> Tuple[str, Dict[str, str]]:
    """Split a console line into an operation name and raw parameters."""
    tokens = shlex.split(line)
    params: Dict[str, str] = {}
    for token in tokens[1:]:
        name, sep, value = token.partition("=")
        if not sep:
            raise ValueError(f"expected name=value, got {token!r}")
        params[name] = value
    return tokens[0], params


def summarize(response) -> str:
    lines = []
    for page in response.results():
        ack = page.ack[0] if page.ack else "?"
        total = page.pagination_output[0].total_entries if page.pagination_output else []
        lines.append(f"ack={ack} total={total[0] if total else '?'}")
        for result in page.search_result:
            for item in result.item[:5]:
                title = item.title[0] if item.title else "(untitled)"
                lines.append(f"  - {title}")
    return "\n".join(lines) or "No results."


async def main() -> None:
    setup_logging()
    async with FindingClient() as client:
        print("eBay Finding console is ready. Type 'exit' or 'quit' to stop.")

        while True:
            try:
                user_input = input("> ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\nExiting.")
                break

            if not user_input:
                continue
            if user_input.lower() in {"exit", "quit"}:
                print("Goodbye.")
                break

            try:
                name, params = parse_line(user_input)
                operation = get_operation(name)
            except KeyError as e:
                print(f"Unknown operation: {e}\n")
                continue
            except ValueError as e:
                print(f"Could not parse input: {e}\n")
                continue

            try:
                response = await client.find_items(operation, params)
            except FindingError as e:
                print(f"Error [{e.kind}]: {e}\n")
                continue
            print(f"{summarize(response)}\n")

    print("Session ended.")


if __name__ == "__main__":
    asyncio.run(main())
