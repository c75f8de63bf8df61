import copy
import unittest

from solana_history.extractor import extract_fungible, extract_native
from solana_history.models import FieldMissing, NativeTransfer, TokenTransfer
from tests.fixtures import native_document, system_transfer, token_transfer, transaction_document


class ExtractNativeTests(unittest.TestCase):
    def test_copies_fields_verbatim(self) -> None:
        transfer = extract_native(native_document())
        self.assertEqual(
            transfer,
            NativeTransfer(
                transaction_id="SIG1",
                sender="SENDER",
                receiver="DEST",
                amount=1_500_000_000,
                timestamp=1700000000,
            ),
        )

    def test_missing_block_time_is_an_error_not_zero(self) -> None:
        with self.assertRaises(FieldMissing) as ctx:
            extract_native(native_document(block_time=None))
        self.assertEqual(ctx.exception.field, "blockTime")
        self.assertEqual(ctx.exception.path, "result.blockTime")

    def test_reports_first_missing_field(self) -> None:
        with self.assertRaises(FieldMissing) as ctx:
            extract_native(native_document(signature=None, block_time=None))
        self.assertEqual(ctx.exception.field, "signatures")

        with self.assertRaises(FieldMissing) as ctx:
            extract_native(native_document(account_keys=[]))
        self.assertEqual(ctx.exception.field, "pubkey")

    def test_rejects_mistyped_amount(self) -> None:
        for lamports in ("100", -5, 1.5, True):
            with self.subTest(lamports=lamports):
                with self.assertRaises(FieldMissing) as ctx:
                    extract_native(transaction_document([system_transfer(lamports=lamports)]))
                self.assertEqual(ctx.exception.field, "lamports")

    def test_reads_only_the_first_instruction(self) -> None:
        doc = transaction_document([{"programId": "ComputeBudget"}, system_transfer()])
        with self.assertRaises(FieldMissing) as ctx:
            extract_native(doc)
        self.assertEqual(ctx.exception.field, "destination")

    def test_sol_amount_is_display_only(self) -> None:
        transfer = extract_native(native_document())
        self.assertEqual(str(transfer.sol_amount), "1.5")
        self.assertEqual(transfer.amount, 1_500_000_000)


class ExtractFungibleTests(unittest.TestCase):
    def test_end_to_end_match(self) -> None:
        doc = {
            "result": {
                "transaction": {
                    "signatures": ["SIG1"],
                    "message": {
                        "instructions": [
                            {
                                "parsed": {
                                    "info": {
                                        "mint": "MINT1",
                                        "tokenAmount": {"uiAmountString": "2.5"},
                                        "source": "A",
                                        "destination": "B",
                                    }
                                }
                            }
                        ]
                    },
                },
                "blockTime": 1700000000,
            }
        }
        self.assertEqual(
            extract_fungible(doc, "MINT1"),
            TokenTransfer(transaction_id="SIG1", sender="A", receiver="B", amount="2.5", timestamp=1700000000),
        )

        other = copy.deepcopy(doc)
        other["result"]["transaction"]["message"]["instructions"][0]["parsed"]["info"]["mint"] = "OTHER"
        self.assertIsNone(extract_fungible(other, "MINT1"))

    def test_scans_past_non_matching_mints(self) -> None:
        doc = transaction_document(
            [token_transfer(mint="OTHER", amount="9"), token_transfer(mint="MINT1", amount="1.25", source="S2")]
        )
        transfer = extract_fungible(doc, "MINT1")
        self.assertEqual(transfer.amount, "1.25")
        self.assertEqual(transfer.sender, "S2")

    def test_returns_first_resolved_match_only(self) -> None:
        doc = transaction_document([token_transfer(amount="1"), token_transfer(amount="2")])
        self.assertEqual(extract_fungible(doc, "MINT1").amount, "1")

    def test_falls_back_to_account(self) -> None:
        doc = transaction_document([token_transfer(source=None, destination=None, account="X")])
        transfer = extract_fungible(doc, "MINT1")
        self.assertEqual(transfer.sender, "X")
        self.assertEqual(transfer.receiver, "X")

    def test_unresolved_instruction_is_skipped(self) -> None:
        doc = transaction_document(
            [
                token_transfer(amount=None),
                token_transfer(source=None),
                token_transfer(amount="3", source="C", destination="D"),
            ]
        )
        transfer = extract_fungible(doc, "MINT1")
        self.assertEqual((transfer.sender, transfer.receiver, transfer.amount), ("C", "D", "3"))

    def test_missing_root_fields_yield_no_result(self) -> None:
        self.assertIsNone(extract_fungible(transaction_document([token_transfer()], block_time=None), "MINT1"))
        self.assertIsNone(extract_fungible(transaction_document([token_transfer()], signature=None), "MINT1"))

    def test_no_instructions_yield_no_result(self) -> None:
        self.assertIsNone(extract_fungible({}, "MINT1"))
        self.assertIsNone(extract_fungible(transaction_document([system_transfer()]), "MINT1"))


class IdempotenceTests(unittest.TestCase):
    def test_repeated_extraction_is_identical(self) -> None:
        native = native_document()
        token = transaction_document([token_transfer()])
        snapshot = copy.deepcopy(native)
        self.assertEqual(extract_native(native), extract_native(native))
        self.assertEqual(extract_fungible(token, "MINT1"), extract_fungible(token, "MINT1"))
        self.assertEqual(native, snapshot)


if __name__ == "__main__":
    unittest.main()
