"""Emperor program interface loaded from its Anchor IDL.

The IDL is read once per process and never mutated. It provides the program
id, the account layouts used to decode ledger state and the account order
used to build instructions.
"""

import hashlib
import json
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from borsh_construct import (
    Bool,
    CStruct,
    I8,
    I16,
    I32,
    I64,
    I128,
    String,
    U8,
    U16,
    U32,
    U64,
    U128,
)
from construct import ConstructError
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from emperor_action.config import get_settings
from emperor_action.errors import AccountDecodeError

logger = logging.getLogger(__name__)

DEFAULT_IDL_PATH = Path(__file__).parent / "idl" / "emperor_program.json"

DISCRIMINATOR_SIZE = 8
PUBKEY_TYPES = ("pubkey", "publicKey")

# IDL primitive -> borsh layout
PRIMITIVE_LAYOUTS = {
    "bool": Bool,
    "u8": U8,
    "u16": U16,
    "u32": U32,
    "u64": U64,
    "u128": U128,
    "i8": I8,
    "i16": I16,
    "i32": I32,
    "i64": I64,
    "i128": I128,
    "string": String,
}


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def sighash(namespace: str, name: str) -> bytes:
    """Anchor discriminator: first 8 bytes of sha256("<namespace>:<name>")."""
    return hashlib.sha256(f"{namespace}:{name}".encode()).digest()[:DISCRIMINATOR_SIZE]


def _field_layout(type_spec: Any):
    if type_spec in PUBKEY_TYPES:
        return U8[32]
    layout = PRIMITIVE_LAYOUTS.get(type_spec)
    if layout is None:
        raise ValueError(f"Unsupported IDL type: {type_spec!r}")
    return layout


def _struct_layout(fields: list[dict]) -> CStruct:
    return CStruct(*(f["name"] / _field_layout(f["type"]) for f in fields))


def _decode_value(type_spec: Any, value: Any) -> Any:
    if type_spec in PUBKEY_TYPES:
        return Pubkey.from_bytes(bytes(value))
    return value


@dataclass(frozen=True)
class AccountSpec:
    """Account slot of an instruction."""

    name: str
    writable: bool = False
    signer: bool = False
    address: Optional[Pubkey] = None


@dataclass(frozen=True)
class InstructionSpec:
    """Instruction definition from the IDL."""

    name: str
    discriminator: bytes
    accounts: tuple[AccountSpec, ...]
    args: tuple[dict, ...] = ()


@dataclass(frozen=True)
class AccountLayout:
    """Decoder for one on-chain account type."""

    name: str
    discriminator: bytes
    fields: tuple[dict, ...]
    layout: Any = field(compare=False, repr=False)

    def decode(self, data: bytes) -> dict[str, Any]:
        """Decode raw account data into a field dict.

        Raises:
            AccountDecodeError: discriminator mismatch or truncated data
        """
        if data[:DISCRIMINATOR_SIZE] != self.discriminator:
            raise AccountDecodeError(f"{self.name}: account discriminator mismatch")
        try:
            parsed = self.layout.parse(data[DISCRIMINATOR_SIZE:])
        except ConstructError as e:
            raise AccountDecodeError(f"{self.name}: {e}") from e
        return {f["name"]: _decode_value(f["type"], parsed[f["name"]]) for f in self.fields}


class ProgramInterface:
    """Read-only view of the program's IDL."""

    def __init__(self, idl: dict):
        address = idl.get("address") or idl.get("metadata", {}).get("address")
        if not address:
            raise ValueError("IDL does not declare a program address")

        self.program_id = Pubkey.from_string(address)
        self.name = idl.get("metadata", {}).get("name") or idl.get("name", "")

        self._instructions = {}
        for ix in idl.get("instructions", []):
            spec = self._parse_instruction(ix)
            self._instructions[spec.name] = spec

        type_defs = {t["name"]: t["type"] for t in idl.get("types", [])}
        self._accounts = {}
        for acc in idl.get("accounts", []):
            type_def = acc.get("type") or type_defs.get(acc["name"])
            if not type_def or type_def.get("kind") != "struct":
                raise ValueError(f"Account {acc['name']} has no struct definition")
            fields = tuple(type_def["fields"])
            self._accounts[acc["name"]] = AccountLayout(
                name=acc["name"],
                discriminator=self._discriminator(acc, "account", acc["name"]),
                fields=fields,
                layout=_struct_layout(list(fields)),
            )

    @staticmethod
    def _discriminator(entry: dict, namespace: str, name: str) -> bytes:
        if "discriminator" in entry:
            return bytes(entry["discriminator"])
        return sighash(namespace, name)

    def _parse_instruction(self, ix: dict) -> InstructionSpec:
        name = _snake_case(ix["name"])
        accounts = []
        for acc in ix.get("accounts", []):
            accounts.append(
                AccountSpec(
                    name=_snake_case(acc["name"]),
                    writable=bool(acc.get("writable", acc.get("isMut", False))),
                    signer=bool(acc.get("signer", acc.get("isSigner", False))),
                    address=Pubkey.from_string(acc["address"]) if acc.get("address") else None,
                )
            )
        return InstructionSpec(
            name=name,
            discriminator=self._discriminator(ix, "global", name),
            accounts=tuple(accounts),
            args=tuple(ix.get("args", [])),
        )

    def instruction(self, name: str) -> InstructionSpec:
        return self._instructions[_snake_case(name)]

    def account(self, name: str) -> AccountLayout:
        return self._accounts[name]

    def find_address(self, *seeds: bytes) -> Pubkey:
        """Derive a program address from fixed seeds."""
        address, _bump = Pubkey.find_program_address(list(seeds), self.program_id)
        return address

    def decode_account(self, name: str, data: bytes) -> dict[str, Any]:
        return self.account(name).decode(data)

    def build_instruction(
        self,
        name: str,
        accounts: dict[str, Pubkey],
        args: Optional[dict[str, Any]] = None,
    ) -> Instruction:
        """Build an instruction with account metas in IDL order.

        Args:
            name: Instruction name (snake or camel case)
            accounts: Pubkey per account name; fixed-address accounts may be omitted
            args: Instruction arguments by name

        Raises:
            ValueError: If an account or argument is missing
        """
        spec = self.instruction(name)

        metas = []
        for slot in spec.accounts:
            pubkey = accounts.get(slot.name, slot.address)
            if pubkey is None:
                raise ValueError(f"{spec.name}: missing account {slot.name}")
            metas.append(AccountMeta(pubkey=pubkey, is_signer=slot.signer, is_writable=slot.writable))

        data = spec.discriminator
        if spec.args:
            args = args or {}
            missing = [a["name"] for a in spec.args if a["name"] not in args]
            if missing:
                raise ValueError(f"{spec.name}: missing args {', '.join(missing)}")
            data += _struct_layout(list(spec.args)).build(
                {a["name"]: args[a["name"]] for a in spec.args}
            )

        return Instruction(program_id=self.program_id, data=data, accounts=metas)


def load_program(path: Optional[Path] = None) -> ProgramInterface:
    """Load a program interface from an IDL file."""
    idl_path = Path(path) if path else DEFAULT_IDL_PATH
    with open(idl_path, encoding="utf-8") as f:
        idl = json.load(f)
    program = ProgramInterface(idl)
    logger.info(f"Loaded IDL {program.name or idl_path.name} for program {program.program_id}")
    return program


@lru_cache
def get_program() -> ProgramInterface:
    """Get the process-wide program interface."""
    settings = get_settings()
    return load_program(Path(settings.idl_path) if settings.idl_path else None)
