from __future__ import annotations

import argparse
import asyncio
import json
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.engine import make_url

from cyber_arena.core.config import get_settings
from cyber_arena.db.models.training_items import TrainingItem
from cyber_arena.db.session import SessionLocal
from cyber_arena.game.items.catalog import (
    CATEGORIES_BY_GAME_TYPE,
    DIFFICULTIES,
    GAME_TYPE_PHISHING,
    GAME_TYPE_QUIZ,
    GAME_TYPE_SCENARIO,
    ITEM_STATUS_ACTIVE,
    RED_FLAG_SEVERITIES,
)

DEFAULT_INPUT = Path(__file__).resolve().parent / "data" / "training_items.json"
REPLACE_ALL_CONFIRMATION = "PROD_REPLACE_ALL_OK"
PRODUCTION_ENVS = {"prod", "production"}


@dataclass(slots=True)
class SeedSummary:
    total_entries_read: int = 0
    total_entries_imported: int = 0


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed training_items from a JSON content file.")
    parser.add_argument("--input", type=Path, default=DEFAULT_INPUT)
    parser.add_argument(
        "--replace-all",
        action="store_true",
        help="Delete existing rows from training_items before import.",
    )
    parser.add_argument(
        "--confirm-replace-all",
        default="",
        help=f"Required with --replace-all in production: {REPLACE_ALL_CONFIRMATION}.",
    )
    parser.add_argument("--expected-db-name", default="")
    parser.add_argument("--dry-run", action="store_true")
    return parser.parse_args()


def _validate_replace_all_safety(
    *,
    app_env: str,
    database_url: str,
    replace_all: bool,
    confirmation_value: str,
    expected_db_name: str,
) -> None:
    if not replace_all or app_env.strip().lower() not in PRODUCTION_ENVS:
        return
    if confirmation_value != REPLACE_ALL_CONFIRMATION:
        raise RuntimeError("--replace-all in production requires explicit confirmation")
    actual_db_name = make_url(database_url).database or ""
    if not expected_db_name or expected_db_name != actual_db_name:
        raise RuntimeError(
            f"expected DB name mismatch: expected={expected_db_name!r}, actual={actual_db_name!r}"
        )


def _require_text(entry: dict[str, Any], key: str, *, where: str) -> str:
    value = str(entry.get(key) or "").strip()
    if not value:
        raise ValueError(f"{where}: empty {key}")
    return value


def _validate_quiz_payload(payload: dict[str, Any], *, where: str) -> None:
    options = payload.get("options")
    if not isinstance(options, list) or len(options) < 2:
        raise ValueError(f"{where}: quiz needs at least 2 options")
    if not all(isinstance(option, str) and option.strip() for option in options):
        raise ValueError(f"{where}: all options must be non-empty")
    correct_option = payload.get("correct_option")
    if isinstance(correct_option, bool) or not isinstance(correct_option, int):
        raise ValueError(f"{where}: correct_option must be an integer")
    if not 0 <= correct_option < len(options):
        raise ValueError(f"{where}: invalid correct_option={correct_option!r}")


def _validate_phishing_payload(payload: dict[str, Any], *, where: str) -> None:
    email = payload.get("email")
    if not isinstance(email, dict):
        raise ValueError(f"{where}: phishing item needs an email")
    for key in ("subject", "body"):
        if not str(email.get(key) or "").strip():
            raise ValueError(f"{where}: email {key} is empty")
    if not isinstance(payload.get("is_phishing"), bool):
        raise ValueError(f"{where}: is_phishing must be a boolean")
    red_flags = payload.get("red_flags") or []
    if not payload["is_phishing"] and red_flags:
        raise ValueError(f"{where}: legitimate email cannot carry red flags")
    for flag in red_flags:
        if flag.get("severity", "medium") not in RED_FLAG_SEVERITIES:
            raise ValueError(f"{where}: invalid red flag severity={flag.get('severity')!r}")


def _validate_scenario_payload(payload: dict[str, Any], *, where: str) -> None:
    choices = payload.get("choices")
    if not isinstance(choices, list) or len(choices) < 2:
        raise ValueError(f"{where}: scenario needs at least 2 choices")
    correct = [choice for choice in choices if choice.get("is_correct") is True]
    if len(correct) != 1:
        raise ValueError(f"{where}: scenario needs exactly one correct choice")
    for choice in choices:
        if not str(choice.get("text") or "").strip():
            raise ValueError(f"{where}: choice text is empty")
        points = choice.get("points")
        if points is None:
            continue
        if isinstance(points, bool) or not isinstance(points, int) or points < 0:
            raise ValueError(f"{where}: choice points must be a non-negative integer")


_PAYLOAD_VALIDATORS = {
    GAME_TYPE_QUIZ: _validate_quiz_payload,
    GAME_TYPE_PHISHING: _validate_phishing_payload,
    GAME_TYPE_SCENARIO: _validate_scenario_payload,
}


def _build_record(entry: dict[str, Any], *, index: int, now_utc: datetime) -> dict[str, Any]:
    where = f"entry {index}"
    item_id = _require_text(entry, "item_id", where=where)
    if len(item_id) > 64:
        raise ValueError(f"{where}: item_id exceeds 64 characters")

    kind = _require_text(entry, "kind", where=where)
    validator = _PAYLOAD_VALIDATORS.get(kind)
    if validator is None:
        raise ValueError(f"{where}: unknown kind={kind!r}")

    category = _require_text(entry, "category", where=where).lower()
    if category not in CATEGORIES_BY_GAME_TYPE[kind]:
        raise ValueError(f"{where}: category={category!r} is not valid for {kind}")

    difficulty = str(entry.get("difficulty") or "medium").strip().lower()
    if difficulty not in DIFFICULTIES:
        raise ValueError(f"{where}: invalid difficulty={difficulty!r}")

    prompt = _require_text(entry, "prompt", where=where)
    payload = entry.get("payload")
    if not isinstance(payload, dict):
        raise ValueError(f"{where}: payload must be an object")
    validator(payload, where=where)

    return {
        "item_id": item_id,
        "kind": kind,
        "category": category,
        "difficulty": difficulty,
        "title": str(entry.get("title") or "").strip() or prompt,
        "prompt": prompt,
        "payload": payload,
        "explanation": str(entry.get("explanation") or "").strip(),
        "status": ITEM_STATUS_ACTIVE,
        "created_at": now_utc,
        "updated_at": now_utc,
    }


def build_records(
    entries: list[dict[str, Any]],
    *,
    now_utc: datetime,
) -> tuple[list[dict[str, Any]], SeedSummary, Counter[str]]:
    summary = SeedSummary(total_entries_read=len(entries))
    by_kind = Counter[str]()
    records: list[dict[str, Any]] = []
    seen_item_ids: set[str] = set()

    for index, entry in enumerate(entries):
        record = _build_record(entry, index=index, now_utc=now_utc)
        if record["item_id"] in seen_item_ids:
            raise ValueError(f"entry {index}: duplicate item_id in seed set: {record['item_id']}")
        seen_item_ids.add(record["item_id"])
        records.append(record)
        by_kind[record["kind"]] += 1

    summary.total_entries_imported = len(records)
    return records, summary, by_kind


def _load_entries(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        raise ValueError(f"input file does not exist: {path}")
    with path.open("r", encoding="utf-8") as handle:
        entries = json.load(handle)
    if not isinstance(entries, list):
        raise ValueError(f"{path.name}: expected a JSON list of items")
    return entries


async def _persist_records(records: list[dict[str, Any]], *, replace_all: bool) -> None:
    if not records:
        raise ValueError("no importable items found")

    async with SessionLocal.begin() as session:
        if replace_all:
            await session.execute(delete(TrainingItem))

        stmt = pg_insert(TrainingItem).values(records)
        stmt = stmt.on_conflict_do_update(
            index_elements=[TrainingItem.item_id],
            set_={
                "kind": stmt.excluded.kind,
                "category": stmt.excluded.category,
                "difficulty": stmt.excluded.difficulty,
                "title": stmt.excluded.title,
                "prompt": stmt.excluded.prompt,
                "payload": stmt.excluded.payload,
                "explanation": stmt.excluded.explanation,
                "status": stmt.excluded.status,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await session.execute(stmt)


async def _run() -> int:
    args = _parse_args()
    settings = get_settings()
    _validate_replace_all_safety(
        app_env=settings.app_env,
        database_url=settings.database_url,
        replace_all=args.replace_all,
        confirmation_value=args.confirm_replace_all,
        expected_db_name=args.expected_db_name,
    )
    records, summary, by_kind = build_records(
        _load_entries(args.input),
        now_utc=datetime.now(timezone.utc),
    )

    if not args.dry_run:
        await _persist_records(records, replace_all=args.replace_all)

    kind_stats = ", ".join(f"{kind}={count}" for kind, count in sorted(by_kind.items()))
    print(  # noqa: T201
        "training_items_seed "
        f"entries_read={summary.total_entries_read} "
        f"entries_imported={summary.total_entries_imported} "
        f"replace_all={args.replace_all} "
        f"dry_run={args.dry_run}"
    )
    print(f"training_items_seed_by_kind {kind_stats}")  # noqa: T201
    return 0


def main() -> int:
    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
