"""
cardreader/tests/test_decoders.py: Unit tests for the field decoders

Tests:
- Name/year first-match scanning of header text
- Label-anchored rating grades
- Defense grid last-match-wins and catcher throwing rating
- Split chart bucketing by handedness marker
- Endurance codes
"""

import pytest

from cardreader.models import DefenseRating
from cardreader.parsing import (
    decode_name_year,
    decode_balance,
    decode_steal_rating,
    decode_run_rating,
    decode_bunting,
    decode_hit_and_run,
    decode_defense,
    decode_hitting,
    decode_pitching,
    decode_endurance,
    find_result_tokens,
)


class TestNameYear:
    """Header decoding"""

    def test_last_first_with_year(self):
        assert decode_name_year("Ruth, Babe (1927)") == ("Ruth, Babe", "1927")

    def test_initial_and_no_space_before_year(self):
        assert decode_name_year("Flick, E.(1905)") == ("Flick, E.", "1905")

    def test_first_matching_line_wins(self):
        text = "~~ .. ~~\n\nGehrig, Lou (1934)\nRuth, Babe (1927)\n"
        assert decode_name_year(text) == ("Gehrig, Lou", "1934")

    @pytest.mark.parametrize("text", [
        "Ruth , Babe (1927)",
        "Ruth ,Babe (1927)",
        "Ruth,Babe (1927)",
    ])
    def test_comma_spacing_normalized(self, text):
        assert decode_name_year(text) == ("Ruth, Babe", "1927")

    def test_noise_around_name(self):
        assert decode_name_year("| O'Neill, Tip (1887) ]") == ("O'Neill, Tip", "1887")

    def test_no_year_means_no_match(self):
        assert decode_name_year("Ruth, Babe\nNew York") == (None, None)

    def test_three_digit_year_is_not_a_year(self):
        assert decode_name_year("Ruth, Babe (927)") == (None, None)

    def test_empty_text(self):
        assert decode_name_year("") == (None, None)


class TestRatings:
    """Label-anchored grade decoders"""

    @pytest.mark.parametrize("text,expected", [
        ("Balance: 1R", "1R"),
        ("balance 9l", "9L"),
        ("Balance: E", "E"),
        ("Balance:  12L something", "12L"),
    ])
    def test_balance(self, text, expected):
        assert decode_balance(text) == expected

    def test_balance_needs_standalone_letter(self):
        assert decode_balance("Balance: Right") is None

    def test_first_balance_wins(self):
        assert decode_balance("Balance: 2L ... Balance: 5R") == "2L"

    @pytest.mark.parametrize("text,expected", [
        ("stealing-(A)", "A"),
        ("Stealing: (aaa)", "AAA"),
        ("stealing (BC)", "BC"),
    ])
    def test_steal(self, text, expected):
        assert decode_steal_rating(text) == expected

    def test_steal_grade_beyond_e_rejected(self):
        assert decode_steal_rating("stealing-(F)") is None

    def test_run(self):
        assert decode_run_rating("running 1-13") == "1-13"
        assert decode_run_rating("Running: 1-17 injury") == "1-17"

    def test_run_needs_two_digit_upper_bound(self):
        assert decode_run_rating("running 1-5") is None

    def test_bunting_and_hit_and_run(self):
        text = "bunting-C hit & run-B"
        assert decode_bunting(text) == "C"
        assert decode_hit_and_run(text) == "B"

    def test_hit_and_run_spacing(self):
        assert decode_hit_and_run("hit&run: a") == "A"

    def test_grade_outside_a_to_d_rejected(self):
        assert decode_bunting("bunting-E") is None

    def test_missing_labels(self):
        text = "nothing to see here"
        assert decode_balance(text) is None
        assert decode_steal_rating(text) is None
        assert decode_run_rating(text) is None
        assert decode_bunting(text) is None
        assert decode_hit_and_run(text) is None


class TestDefense:
    """Defense grid decoding"""

    def test_single_position(self):
        defense = decode_defense("ss-2e12")
        assert dict(defense) == {'SS': DefenseRating(range=2, error=12)}

    def test_arm_modifier(self):
        defense = decode_defense("lf-1(+2)e3 rf-3(-1)e7")
        assert defense['LF'] == DefenseRating(range=1, error=3, arm=2)
        assert defense['RF'] == DefenseRating(range=3, error=7, arm=-1)

    def test_repeated_position_last_match_wins(self):
        defense = decode_defense("1B-2E5 ... 1B-3E4")
        assert list(defense) == ['1B']
        assert defense['1B'].range == 3
        assert defense['1B'].error == 4

    def test_keys_are_uppercased(self):
        defense = decode_defense("1b-2e5 ss-1e10")
        assert set(defense) == {'1B', 'SS'}

    def test_throwing_attached_to_catcher(self):
        defense = decode_defense("c-1(-5)e1 T-1")
        assert defense['C'] == DefenseRating(range=1, error=1, arm=-5, throwing="T-1")

    def test_throwing_without_catcher_is_dropped(self):
        defense = decode_defense("1b-2e5 T-2")
        assert dict(defense) == {'1B': DefenseRating(range=2, error=5)}

    def test_throwing_alone_creates_no_entry(self):
        assert decode_defense("T-2") is None

    def test_no_entries(self):
        assert decode_defense("running 1-11") is None

    def test_result_is_read_only(self):
        defense = decode_defense("ss-2e12")
        with pytest.raises(TypeError):
            defense['SS'] = DefenseRating(range=1, error=1)


class TestSplits:
    """Split chart decoding"""

    def test_result_token_patterns(self):
        tokens = find_result_tokens("1-5 HR 6-8 SI** DO* walk HOMERUN")
        assert tokens == ["1-5 HR", "6-8 SI**", "DO*", "walk", "HOMERUN"]

    def test_outcome_word_not_split_into_shorthand(self):
        assert find_result_tokens("DOUBLE") == ["DOUBLE"]

    def test_range_codes(self):
        tokens = find_result_tokens("1-2 K 3-4 BB 5-6 GB* 7-8 HBP 9-10 FO")
        assert tokens == ["1-2 K", "3-4 BB", "5-6 GB*", "7-8 HBP", "9-10 FO"]

    def test_labels_after_range_are_not_results(self):
        chart = decode_hitting("RUNNING 1-11 BUNTING-C vs LEFTY PITCHERS 1-5 HR")
        assert chart.vs_lefty.column1 == ("1-5 HR",)
        assert chart.vs_lefty.column2 == ()

        chart = decode_hitting("vs LEFTY PITCHERS 1-5 HR 2-5 LEFTY")
        assert chart.vs_lefty.column1 == ("1-5 HR",)
        assert chart.vs_lefty.column2 == ()

    def test_marked_lines_fill_buckets(self):
        text = (
            "vs LEFTY PITCHERS 1-5 HR 6-8 SI** WALK 9-11 DO\n"
            "vs RIGHTY PITCHERS 1-3 TR strikeout\n"
        )
        chart = decode_hitting(text)

        assert chart.vs_lefty.column1 == ("1-5 HR", "9-11 DO")
        assert chart.vs_lefty.column2 == ("6-8 SI**",)
        assert chart.vs_lefty.column3 == ("WALK",)
        assert chart.vs_righty.column4 == ("1-3 TR",)
        assert chart.vs_righty.column5 == ("strikeout",)
        assert chart.vs_righty.column6 == ()

    def test_unmarked_line_goes_to_neither_bucket(self):
        text = (
            "vs LEFTY PITCHERS 1-5 HR\n"
            "6-8 SI**\n"
        )
        chart = decode_hitting(text)

        lefty = chart.vs_lefty.column1 + chart.vs_lefty.column2 + chart.vs_lefty.column3
        righty = chart.vs_righty.column4 + chart.vs_righty.column5 + chart.vs_righty.column6
        assert "6-8 SI**" not in lefty
        assert "6-8 SI**" not in righty
        assert lefty == ("1-5 HR",)

    def test_only_unmarked_lines_yields_no_chart(self):
        assert decode_hitting("1-5 HR\n6-8 SI**\n") is None

    def test_hitting_ignores_pitching_markers(self):
        assert decode_hitting("vs LEFTY BATTERS 1-5 HR") is None

    def test_pitching_chart_and_endurance(self):
        text = (
            "S6\n"
            "vs LEFTY BATTERS 1-4 strikeout\n"
            "vs RIGHTY HITTERS 1-2 HR\n"
        )
        chart = decode_pitching(text)

        assert chart.endurance == "S6"
        assert chart.vs_lefty.column1 == ("1-4 strikeout",)
        assert chart.vs_righty.column4 == ("1-2 HR",)

    def test_pitching_with_endurance_only(self):
        chart = decode_pitching("endurance R2")
        assert chart.endurance == "R2"
        assert chart.is_empty()

    def test_pitching_absent(self):
        assert decode_pitching("Balance: 1R stealing-(B)") is None

    def test_first_endurance_wins(self):
        assert decode_endurance("C4 ... S6") == "C4"

    def test_endurance_must_stand_alone(self):
        assert decode_endurance("c-1(-5)e1 RS7X") is None
