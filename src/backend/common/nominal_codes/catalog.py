from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .matching import split_keywords
from .models import NominalCode, NominalCodeItemType, NominalCodeRule, RuleSetEntry

_TYPE_ORDER = {t.value: i for i, t in enumerate(NominalCodeItemType)}


def build_rule_catalog(
    rules: Sequence[NominalCodeRule],
    nominal_codes: Sequence[NominalCode],
) -> List[RuleSetEntry]:
    """List rules in the order they are evaluated, grouped by item type.

    Incomplete rules and rules pointing at missing nominal codes are kept and
    flagged in `problems` so they can be fixed.
    """
    codes_by_id = {code.id: code for code in nominal_codes}
    entries: List[tuple[int, int, int, RuleSetEntry]] = []
    for position, rule in enumerate(rules):
        problems: List[str] = []
        if rule.item_type is None:
            problems.append("missing item type")
        code = None
        if not rule.nominal_code_id:
            problems.append("missing nominal code")
        else:
            code = codes_by_id.get(rule.nominal_code_id)
            if code is None:
                problems.append(f"nominal code {rule.nominal_code_id} not found")

        keywords = split_keywords(rule.keywords)
        item_type = rule.item_type.value if rule.item_type is not None else None
        entry = RuleSetEntry(
            rule_id=rule.id,
            priority=rule.priority,
            entity_id=rule.entity_id,
            item_type=item_type,
            keywords=keywords,
            exclude_keywords=split_keywords(rule.exclude_keywords),
            wildcard=not keywords,
            nominal_code_id=rule.nominal_code_id,
            nominal_code=code.label if code else None,
            problems=problems,
        )
        type_rank = _TYPE_ORDER.get(item_type or "", len(_TYPE_ORDER))
        entries.append((type_rank, -rule.priority, position, entry))

    entries.sort(key=lambda e: e[:3])
    return [e[3] for e in entries]


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    try:
        import yaml  # type: ignore
    except ModuleNotFoundError as exc:
        raise SystemExit("PyYAML is required for YAML output (pip install pyyaml).") from exc

    return yaml.safe_dump(catalog, sort_keys=False)


def _load_documents(path: Path) -> List[Dict[str, Any]]:
    with path.open(encoding="utf-8") as handle:
        raw = json.load(handle)
    if not isinstance(raw, list):
        raise SystemExit(f"{path} must contain a JSON array of documents.")
    return raw


def main(argv: list[str] | None = None) -> None:
    from adapters.documents import nominal_code_rules_from_documents, nominal_codes_from_documents

    parser = argparse.ArgumentParser(description="Show nominal code rules in evaluation order.")
    parser.add_argument("--rules", required=True, help="JSON file of nominalCodeRules documents.")
    parser.add_argument("--codes", required=True, help="JSON file of nominalCodes documents.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    rules = nominal_code_rules_from_documents(_load_documents(Path(args.rules)))
    codes = nominal_codes_from_documents(_load_documents(Path(args.codes)))
    catalog = [e.model_dump() for e in build_rule_catalog(rules, codes)]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
