"""
Tests for the command-line front end.
"""

import argparse
import os
import shlex

import pytest

import main
from main import parse_dragon, parse_monster, run


@pytest.fixture
def cli(fixture_data_dir):
    """Run the CLI against the fixture catalogs."""
    def invoke(*args):
        return run(["--data-dir", fixture_data_dir, *args])
    return invoke


class TestArgumentParsing:
    def test_parse_dragon(self):
        assert parse_dragon("Ember:30") == ("Ember", "30", "0")
        assert parse_dragon("Ember:30:2") == ("Ember", "30", "2")

    def test_parse_monster_keeps_colons_in_name(self):
        assert parse_monster("Lord: Slime:10") == ("Lord: Slime", "10")

    @pytest.mark.parametrize("text", ["Ember", "a:b:c:d"])
    def test_bad_dragon(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_dragon(text)

    def test_bad_monster(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_monster(":10")


class TestRun:
    def test_list_venues(self, cli, capsys):
        assert cli("--list-venues") == 0
        assert capsys.readouterr().out.splitlines() == ["Training Fields", "Mire", "Kelp Beds"]

    def test_venue_encounter_flow(self, cli, capsys):
        code = cli(
            "--venue", "Training Fields",
            "--encounter", "Bogsneak, Spriggan",
            "--dragon", "Ember:25:1",
            "--rounds", "1",
        )

        out = capsys.readouterr().out
        assert code == 0
        assert "[ENC] Committed encounter: Bogsneak, Spriggan" in out
        assert "  1. Ember" in out
        assert "  3. Spriggan" in out

    def test_choices(self, cli, capsys):
        cli("--venue", "Training Fields", "--choices")

        out = capsys.readouterr().out
        assert "Slot 1: Bogsneak, Mudfin, Spriggan" in out
        assert "Slot 2: -" in out

    def test_custom_monsters_without_venue(self, cli, capsys):
        assert cli("--monster", "Slime:10", "--monster", "Ogre:15", "--rounds", "1") == 0
        assert "  1. Ogre" in capsys.readouterr().out

    def test_round_limit(self, cli, capsys):
        assert cli("--monster", "Slime:10", "--rounds", "51") == 1
        assert "numRounds exceeds limit" in capsys.readouterr().err

    def test_unknown_venue(self, cli, capsys):
        assert cli("--venue", "Atlantis") == 2
        assert "Unknown venue: Atlantis" in capsys.readouterr().err

    def test_bad_quickness(self, cli, capsys):
        assert cli("--dragon", "Ember:fast") == 2

    def test_missing_data_dir(self, tmp_path, capsys):
        assert run(["--data-dir", str(tmp_path), "--list-venues"]) == 2

    def test_save_log(self, cli, tmp_path, capsys):
        cli("--monster", "Slime:10", "--rounds", "1", "--save-log", str(tmp_path))
        assert len(list(tmp_path.glob("turns_*.log"))) == 1

    def test_huge_quickness_reported(self, cli, capsys):
        assert cli("--monster", "Slime:99999999999999999999", "--rounds", "1") == 1

        captured = capsys.readouterr()
        assert "Error: quickness out of range" in captured.err
        assert "[ERR] Cannot calculate turns: quickness out of range" in captured.out


class TestUsageExamples:
    """The examples in the --help epilog run from the project root."""

    @staticmethod
    def example_commands():
        prefix = "python main.py "
        lines = [line.strip() for line in main.__doc__.splitlines()]
        return [shlex.split(line)[2:] for line in lines if line.startswith(prefix)]

    def test_examples_listed(self):
        assert len(self.example_commands()) == 4

    def test_examples_succeed(self, monkeypatch, capsys):
        monkeypatch.chdir(os.path.dirname(os.path.abspath(main.__file__)))

        for argv in self.example_commands():
            assert run(argv) == 0, argv
            assert "Error:" not in capsys.readouterr().err
