"""命令行入口：规范化持久化 JSON 文件、查看数据模式。

    life-vault normalize pets data/collections/pets_v1.json
    life-vault mode
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from life_vault import __version__
from life_vault.auth.data_mode import get_resolver
from life_vault.coerce import DropHook, DropLog
from life_vault.config import LOG_LEVEL
from life_vault.documents.migrate import normalize_and_migrate_documents
from life_vault.models import VaultModel
from life_vault.profile.normalize import (
    normalize_and_migrate_pet_list,
    normalize_household_list,
    normalize_person_list,
)
from life_vault.records.normalize import normalize_record_list

logger = logging.getLogger(__name__)

Normalizer = Callable[[Any, Optional[DropHook]], List[VaultModel]]

NORMALIZERS: Dict[str, Normalizer] = {
    "people": normalize_person_list,
    "pets": normalize_and_migrate_pet_list,
    "households": normalize_household_list,
    "documents": normalize_and_migrate_documents,
    "records": normalize_record_list,
}


def _cmd_normalize(args: argparse.Namespace) -> int:
    path = Path(args.file)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("cannot read %s: %s", path, e)
        return 1
    drops = DropLog()
    items = NORMALIZERS[args.kind](raw, drops)
    json.dump([item.to_json_dict() for item in items], sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    if drops.count:
        logger.warning("dropped %d of %d %s entries", drops.count, drops.count + len(items), args.kind)
    return 0


def _cmd_mode(args: argparse.Namespace) -> int:
    resolver = get_resolver()
    local_only = asyncio.run(resolver.is_local_only())
    print("local" if local_only else "remote")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="life-vault", description="家庭档案库工具")
    parser.add_argument("--version", action="version", version=__version__)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("normalize", help="规范化一个持久化集合文件并输出 JSON")
    p.add_argument("kind", choices=sorted(NORMALIZERS))
    p.add_argument("file")
    p.set_defaults(func=_cmd_normalize)

    p = sub.add_parser("mode", help="输出当前数据模式（local / remote）")
    p.set_defaults(func=_cmd_mode)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
