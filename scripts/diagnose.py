# ruff: noqa: E402

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from kapa_docs.app.readiness import build_readiness_report
from kapa_docs.app.upstream.client import KapaApiError, KapaClient
from kapa_docs.app.upstream.contracts import QueryRequest
from kapa_docs.app.upstream.normalizer import normalize
from kapa_docs.core.config import load_config
from kapa_docs.core.env import load_dotenv_file


def _print_result(name: str, ok: bool, detail: str) -> bool:
    status = "OK" if ok else "FAIL"
    print(f"[{status}] {name}: {detail}")
    return ok


def _verify_dotenv(path: Path) -> bool:
    pairs = load_dotenv_file(path)
    if pairs is None:
        return _print_result(".env", False, f"{path} missing; copy .env.example to .env")
    masked = ", ".join(f"{key}=***" for key in pairs) or "no variables"
    return _print_result(".env", True, masked)


def _verify_config() -> bool:
    report = build_readiness_report()
    if not report["ready"]:
        return _print_result("configuration", False, str(report["reason"]))
    _print_result("configuration", True, f"endpoint {report['kapa']['endpoint']}")
    print(json.dumps(report, indent=2))
    return True


async def _probe_kapa(question: str) -> bool:
    config = load_config()
    async with KapaClient(config) as client:
        try:
            raw = await client.query(QueryRequest(query=question, context="diagnostic"))
        except KapaApiError as exc:
            return _print_result("kapa", False, f"{exc.kind}: {exc}")
    response = normalize(raw)
    return _print_result(
        "kapa",
        True,
        f"answered with {len(response.sources)} sources "
        f"(confidence={response.confidence:.2f})",
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Documentation MCP server diagnostic")
    parser.add_argument("--env-file", default=".env")
    parser.add_argument(
        "--probe",
        action="store_true",
        help="send one real query to the Kapa API",
    )
    parser.add_argument("--question", default="What is a content type?")
    args = parser.parse_args()

    print("Documentation MCP server diagnostic")
    print("-" * 36)

    checks = [_verify_dotenv(Path(args.env_file)), _verify_config()]
    if args.probe and checks[-1]:
        checks.append(asyncio.run(_probe_kapa(args.question)))

    if all(checks):
        print("All checks passed.")
        return 0

    print("One or more checks failed. Update .env and rerun.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
