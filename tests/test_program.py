"""Tests for the IDL-driven program interface."""

import hashlib

import pytest
from solders.pubkey import Pubkey

from emperor_action.errors import AccountDecodeError
from emperor_action.program import ProgramInterface, sighash
from emperor_action.web.services.state_reader import game_address

PROGRAM_ID = "Fg6PaFpoGXkYsidMpWTK6W2BeZ7FEfcYkg476zPFsLnS"
SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")


class TestProgramInterface:
    """Tests for loading the bundled IDL."""

    def test_program_id_from_idl(self, program):
        assert program.program_id == Pubkey.from_string(PROGRAM_ID)

    def test_anchor_discriminators(self, program):
        expected = hashlib.sha256(b"global:claim_throne").digest()[:8]
        assert program.instruction("claim_throne").discriminator == expected
        assert program.instruction("claimThrone").discriminator == expected
        assert program.account("Game").discriminator == sighash("account", "Game")

    def test_game_address_is_seed_derived(self, program):
        expected, _ = Pubkey.find_program_address([b"game"], program.program_id)
        assert game_address(program) == expected
        # deterministic
        assert game_address(program) == game_address(program)


class TestAccountDecoding:
    """Tests for decoding the Game account."""

    def test_decode_game(self, program, game_data, emperor, fee_recipient):
        data = game_data(
            {"current_bid": 2_500_000_000, "current_emperor": emperor, "fee_recipient": fee_recipient}
        )

        fields = program.decode_account("Game", data)

        assert fields["current_bid"] == 2_500_000_000
        assert fields["current_emperor"] == emperor
        assert fields["fee_recipient"] == fee_recipient

    def test_wrong_discriminator(self, program, game_data, emperor, fee_recipient):
        data = game_data(
            {"current_bid": 1, "current_emperor": emperor, "fee_recipient": fee_recipient}
        )

        with pytest.raises(AccountDecodeError):
            program.decode_account("Game", b"\x00" * 8 + data[8:])

    def test_truncated_data(self, program):
        data = program.account("Game").discriminator + b"\x01\x02\x03"

        with pytest.raises(AccountDecodeError):
            program.decode_account("Game", data)


class TestInstructionBuilding:
    """Tests for building instructions from the IDL."""

    def test_claim_throne_account_order(self, program, emperor, fee_recipient):
        user = Pubkey.new_unique()
        game = game_address(program)

        ix = program.build_instruction(
            "claim_throne",
            accounts={
                "game": game,
                "user": user,
                "current_emperor_account": emperor,
                "fee_recipient_account": fee_recipient,
            },
        )

        assert ix.program_id == program.program_id
        assert ix.data == sighash("global", "claim_throne")
        assert [m.pubkey for m in ix.accounts] == [game, user, emperor, fee_recipient, SYSTEM_PROGRAM_ID]
        assert [m.is_signer for m in ix.accounts] == [False, True, False, False, False]
        assert [m.is_writable for m in ix.accounts] == [True, True, True, True, False]

    def test_missing_account(self, program):
        with pytest.raises(ValueError, match="current_emperor_account"):
            program.build_instruction(
                "claim_throne",
                accounts={"game": game_address(program), "user": Pubkey.new_unique()},
            )

    def test_instruction_args_encoded(self, program):
        authority = Pubkey.new_unique()

        ix = program.build_instruction(
            "initialize",
            accounts={
                "game": game_address(program),
                "authority": authority,
                "fee_recipient": Pubkey.new_unique(),
            },
            args={"starting_bid": 1_000_000_000},
        )

        assert ix.data == sighash("global", "initialize") + (1_000_000_000).to_bytes(8, "little")

    def test_missing_args(self, program):
        with pytest.raises(ValueError, match="starting_bid"):
            program.build_instruction(
                "initialize",
                accounts={
                    "game": game_address(program),
                    "authority": Pubkey.new_unique(),
                    "fee_recipient": Pubkey.new_unique(),
                },
            )


class TestLegacyIdl:
    """Pre-0.30 Anchor IDLs use camelCase names and isMut/isSigner flags."""

    def test_legacy_format(self):
        idl = {
            "name": "emperor_program",
            "metadata": {"address": PROGRAM_ID},
            "instructions": [
                {
                    "name": "claimThrone",
                    "accounts": [
                        {"name": "game", "isMut": True, "isSigner": False},
                        {"name": "user", "isMut": True, "isSigner": True},
                        {"name": "currentEmperorAccount", "isMut": True, "isSigner": False},
                        {"name": "feeRecipientAccount", "isMut": True, "isSigner": False},
                        {"name": "systemProgram", "isMut": False, "isSigner": False},
                    ],
                    "args": [],
                }
            ],
            "accounts": [
                {
                    "name": "Game",
                    "type": {
                        "kind": "struct",
                        "fields": [
                            {"name": "current_emperor", "type": "publicKey"},
                            {"name": "current_bid", "type": "u64"},
                            {"name": "fee_recipient", "type": "publicKey"},
                        ],
                    },
                }
            ],
        }

        program = ProgramInterface(idl)
        spec = program.instruction("claim_throne")

        assert program.program_id == Pubkey.from_string(PROGRAM_ID)
        assert [a.name for a in spec.accounts] == [
            "game",
            "user",
            "current_emperor_account",
            "fee_recipient_account",
            "system_program",
        ]
        assert spec.accounts[1].signer is True
        assert spec.discriminator == sighash("global", "claim_throne")

    def test_missing_address(self):
        with pytest.raises(ValueError, match="program address"):
            ProgramInterface({"instructions": [], "accounts": []})
