"""Tests for the deck conversion job."""

from pathlib import Path

import pytest

from deckbuilder.jobs.convert_deck import build_parser, convert_deck_text, main
from deckbuilder.models.deck import RenderOptions
from deckbuilder.models.failure import UnknownFormatError


class TestConvertDeckText:
    def test_arena_to_mtgo(self, sample_arena_export: str) -> None:
        output = convert_deck_text(
            sample_arena_export, "mtgo", options=RenderOptions(include_sideboard=True)
        )

        assert output == (
            "4 Lightning Bolt\n1 Sol Ring\n20 Mountain\n\nSideboard\n2 Pyroblast"
        )

    def test_sideboard_left_out_by_default(self, sample_arena_export: str) -> None:
        output = convert_deck_text(sample_arena_export, "simple")

        assert "Pyroblast" not in output

    def test_commander_flag(self) -> None:
        text = "Commander\n1 Atraxa, Praetors' Voice\n\nDeck\n1 Sol Ring"

        output = convert_deck_text(text, "arena", from_format="arena", commander=True)

        assert output.splitlines()[:2] == ["Commander", "1 Atraxa, Praetors' Voice"]

    def test_commander_section_kept_without_flag(self) -> None:
        text = "\n".join(
            [
                "Commander",
                "1 Atraxa, Praetors' Voice (2X2) 190",
                "",
                "Deck",
                "4 Lightning Bolt (M21) 199",
            ]
        )

        assert convert_deck_text(text, "arena") == text

    def test_unknown_target(self) -> None:
        with pytest.raises(UnknownFormatError):
            convert_deck_text("4 Lightning Bolt", "tappedout")


class TestMain:
    def test_writes_to_output_file(self, tmp_path: Path, sample_arena_export: str) -> None:
        source = tmp_path / "deck.txt"
        source.write_text(sample_arena_export, encoding="utf-8")
        target = tmp_path / "deck.csv"

        exit_code = main([str(source), "--to", "moxfield", "--sideboard", "-o", str(target)])

        assert exit_code == 0
        lines = target.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("Count,Name")
        assert lines[-1] == "2,Pyroblast,ema,142,,,English,Sideboard"

    def test_writes_to_stdout(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        source = tmp_path / "deck.txt"
        source.write_text("4 Lightning Bolt\n\n2 Pyroblast", encoding="utf-8")

        exit_code = main([str(source), "--from", "mtgo", "--to", "simple", "--sideboard"])

        assert exit_code == 0
        assert capsys.readouterr().out == "4 Lightning Bolt\n\nSideboard\n2 Pyroblast\n"

    def test_missing_input_file(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        exit_code = main([str(tmp_path / "missing.txt"), "--to", "mtgo"])

        assert exit_code == 1
        assert any("missing.txt" in r.getMessage() for r in caplog.records)

    def test_rejects_unknown_target(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["deck.txt", "--to", "tappedout"])
