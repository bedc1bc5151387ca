"""Inspect and edit encoded AML registrars from the command line.

Registrars are passed around as url-safe base64 of their storage form.

    aml-policy new --authority aml.authority --score 5
    aml-policy update <blob> Scam 6
    aml-policy show <blob>
    aml-policy check <blob> Mixer 7
    aml-policy save <owner_id> <blob>
    aml-policy load <owner_id>
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from aml_registrar.aml.category import Category
from aml_registrar.aml.codec import decode_registrar_b64, encode_registrar_b64
from aml_registrar.aml.evaluation import is_risk_accepted
from aml_registrar.aml.registrar import AccountId, AmlRegistrar
from aml_registrar.core.config import get_settings
from aml_registrar.core.errors import RegistrarError
from aml_registrar.core.logging import setup_logging
from aml_registrar.schemas.v1.policy import PolicySchema

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="aml-policy", description=__doc__.splitlines()[0])
    commands = parser.add_subparsers(dest="command", required=True)

    new = commands.add_parser("new", help="Create a registrar and print its blob")
    new.add_argument("--authority", help="Authority account id (default: AML_DEFAULT_AUTHORITY)")
    new.add_argument("--score", type=int, help="Default accepted risk score")

    show = commands.add_parser("show", help="Print the policy of a blob as JSON")
    show.add_argument("blob")

    update = commands.add_parser("update", help="Set a category threshold and print the new blob")
    update.add_argument("blob")
    update.add_argument("category", type=Category)
    update.add_argument("score", type=int)

    remove = commands.add_parser("remove", help="Remove a category and print the new blob")
    remove.add_argument("blob")
    remove.add_argument("category", type=Category)

    authority = commands.add_parser(
        "set-authority", help="Replace the authority and print the new blob"
    )
    authority.add_argument("blob")
    authority.add_argument("authority")

    check = commands.add_parser("check", help="Exit 0 if the reported score is accepted, 1 if not")
    check.add_argument("blob")
    check.add_argument("category", type=Category)
    check.add_argument("score", type=int)

    save = commands.add_parser("save", help="Store a blob for an owner")
    save.add_argument("owner_id")
    save.add_argument("blob")

    load = commands.add_parser("load", help="Print the stored blob of an owner")
    load.add_argument("owner_id")

    return parser.parse_args(argv)


async def _save(owner_id: str, registrar: AmlRegistrar) -> int:
    from aml_registrar.core.database import reset_engine, session_scope
    from aml_registrar.persistence.registrar_repository import RegistrarRepository

    try:
        async with session_scope() as session:
            return await RegistrarRepository(session).save(owner_id, registrar)
    finally:
        await reset_engine()


async def _load(owner_id: str) -> AmlRegistrar:
    from aml_registrar.core.database import reset_engine, session_scope
    from aml_registrar.persistence.registrar_repository import RegistrarRepository

    try:
        async with session_scope() as session:
            return await RegistrarRepository(session).get(owner_id)
    finally:
        await reset_engine()


def _run(args: argparse.Namespace) -> int:
    if args.command == "new":
        defaults = get_settings().registrar
        authority = args.authority if args.authority is not None else defaults.default_authority
        score = args.score if args.score is not None else defaults.default_accepted_risk_score
        print(encode_registrar_b64(AmlRegistrar(AccountId(authority), score)))
        return EXIT_OK

    if args.command == "load":
        print(encode_registrar_b64(asyncio.run(_load(args.owner_id))))
        return EXIT_OK

    registrar = decode_registrar_b64(args.blob)

    if args.command == "show":
        print(PolicySchema.from_registrar(registrar).model_dump_json(indent=2))
    elif args.command == "update":
        registrar.update_category(args.category, args.score)
        print(encode_registrar_b64(registrar))
    elif args.command == "remove":
        registrar.remove_category(args.category)
        print(encode_registrar_b64(registrar))
    elif args.command == "set-authority":
        registrar.set_authority(AccountId(args.authority))
        print(encode_registrar_b64(registrar))
    elif args.command == "check":
        accepted = is_risk_accepted(registrar.get_thresholds(), args.category, args.score)
        print("accepted" if accepted else "rejected")
        return EXIT_OK if accepted else EXIT_REJECTED
    elif args.command == "save":
        print(asyncio.run(_save(args.owner_id, registrar)))
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(stream=sys.stderr)
    try:
        return _run(args)
    except RegistrarError as e:
        print(f"{e.code}: {e.message}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
