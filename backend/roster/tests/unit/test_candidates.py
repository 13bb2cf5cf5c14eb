from roster.logic.candidates import list_candidates
from roster.logic.enums import RosterRole
from roster.tests.conftest import create_participant


def _names(participants):
    return [p.display_name for p in participants]


class TestListCandidates:
    def test_splits_by_character_role(self):
        pool = [
            create_participant(1, "Aria", role=RosterRole.HEALER),
            create_participant(2, "Bram", role=RosterRole.TANK),
            create_participant(3, "Cleo", role=RosterRole.HEALER),
            create_participant(4, "Dax"),
        ]
        result = list_candidates(pool, RosterRole.HEALER)

        assert _names(result.matching) == ["Aria", "Cleo"]
        assert _names(result.other) == ["Bram", "Dax"]

    def test_browse_all_puts_everyone_in_other(self):
        pool = [create_participant(1, "Aria", role=RosterRole.HEALER), create_participant(2, "Bram")]
        result = list_candidates(pool)

        assert result.matching == ()
        assert _names(result.other) == ["Aria", "Bram"]

    def test_search_is_case_insensitive_substring(self):
        pool = [
            create_participant(1, "Moonfire", role=RosterRole.DPS),
            create_participant(2, "Stonewall", role=RosterRole.TANK),
            create_participant(3, "moonlight", role=RosterRole.HEALER),
        ]
        result = list_candidates(pool, RosterRole.DPS, "  MOON ")

        assert _names(result.matching) == ["Moonfire"]
        assert _names(result.other) == ["moonlight"]

    def test_no_match(self):
        result = list_candidates([create_participant(1, "Aria")], RosterRole.TANK, "zzz")

        assert result.matching == ()
        assert result.other == ()
