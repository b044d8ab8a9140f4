"""Tests for the record assembler."""

from gedgraph import assembler
from gedgraph.assembler import AssemblerState, Mode, parse_gedcom_content, step
from gedgraph.models import ParseResult
from gedgraph.parsing import tokenize


class TestParseGedcomContent:
    """Tests for building individuals and families from the sample tree."""

    def test_counts(self, parse_result):
        assert len(parse_result.individuals) == 5
        assert len(parse_result.families) == 2
        assert parse_result.errors == []
        assert parse_result.warnings == []

    def test_individual_fields(self, parse_result):
        pierre = parse_result.individuals["I1"]

        assert pierre.name.given == "Pierre"
        assert pierre.name.family == "Delpech"
        assert pierre.sex == "M"
        assert pierre.occupation == "Farmer"
        assert (pierre.birth_date.year, pierre.birth_date.month, pierre.birth_date.day) == (1760, 5, 10)
        assert "Provence" in pierre.birth_place.parts
        assert pierre.death_date.year == 1835
        assert pierre.fams == ["F1"]
        assert pierre.famc == []

    def test_family_fields(self, parse_result):
        family = parse_result.families["F1"]

        assert family.husband == "I1"
        assert family.wife == "I2"
        assert family.children == ["I3"]
        assert family.marriage_date.year == 1785

    def test_child_links(self, parse_result):
        marie = parse_result.individuals["I3"]
        assert marie.famc == ["F1"]
        assert marie.fams == ["F2"]

    def test_record_after_families_is_kept(self, parse_result):
        louise = parse_result.individuals["I5"]
        assert louise.name.full == "Louise Grognier"
        assert louise.famc == ["F2"]

    def test_total_lines(self, parse_result, sample_gedcom):
        assert parse_result.total_lines == len([l for l in sample_gedcom.split("\n") if l.strip()])


class TestRecordLifecycle:
    """Tests for record start, finalize and identifier handling."""

    def test_identifier_from_value_when_no_xref(self):
        result = parse_gedcom_content("0 INDI @I9@\n1 NAME Solo /Person/")
        assert list(result.individuals) == ["I9"]

    def test_other_level_zero_record_closes_current_record(self):
        result = parse_gedcom_content(
            "0 @I1@ INDI\n1 NAME Anne /Roux/\n0 @N1@ NOTE shared note\n1 SEX F\n"
        )
        assert result.individuals["I1"].sex is None

    def test_missing_identifier_is_skipped_with_warning(self):
        result = parse_gedcom_content("0 INDI\n1 NAME Nobody\n0 @I2@ INDI\n1 NAME Some /One/")

        assert list(result.individuals) == ["I2"]
        assert result.warnings == ["Line 1: record without identifier skipped"]

    def test_duplicate_identifier_replaces_with_warning(self):
        result = parse_gedcom_content("0 @I1@ INDI\n1 NAME First /One/\n0 @I1@ INDI\n1 NAME Second /One/")

        assert result.individuals["I1"].name.given == "Second"
        assert len(result.warnings) == 1
        assert "duplicate identifier I1" in result.warnings[0]

    def test_step_finalizes_on_level_zero(self):
        lines = tokenize("0 @F1@ FAM\n1 CHIL @I3@\n0 @I1@ INDI")
        result = ParseResult(individuals={}, families={})

        state = AssemblerState()
        for index in range(len(lines)):
            state = step(state, lines, index, result)

        assert state.mode is Mode.BUILDING_INDIVIDUAL
        assert state.record.id == "I1"
        assert result.families["F1"].children == ["I3"]
        assert result.individuals == {}


class TestIndividualTags:
    """Tests for optional individual tags."""

    def test_note_with_continuation_and_occupation(self):
        result = parse_gedcom_content(
            "0 @I1@ INDI\n1 NOTE Born in the mill\n2 CONT at Aix\n1 OCCU Miller\n"
        )
        individual = result.individuals["I1"]

        assert individual.note == "Born in the mill\nat Aix"
        assert individual.occupation == "Miller"

    def test_pointer_note_is_ignored(self):
        result = parse_gedcom_content("0 @I1@ INDI\n1 NOTE @N1@")
        assert result.individuals["I1"].note is None

    def test_media_reference(self):
        result = parse_gedcom_content(
            "0 @I1@ INDI\n1 OBJE https://example.org/a.jpg\n1 OBJE https://example.org/b.jpg"
        )
        assert result.individuals["I1"].photo_url == "https://example.org/a.jpg"

    def test_other_events(self):
        result = parse_gedcom_content("0 @I1@ INDI\n1 BURI\n2 DATE 1900\n2 PLAC Lyon\n1 EVEN Unknown")
        events = result.individuals["I1"].events

        assert [e.type for e in events] == ["BURI"]
        assert events[0].date.year == 1900
        assert events[0].place.city == "Lyon"

    def test_first_name_is_primary(self):
        result = parse_gedcom_content("0 @I1@ INDI\n1 NAME Jean /Roux/\n1 NAME Johnny /Red/")
        assert result.individuals["I1"].name.full == "Jean Roux"

    def test_birth_without_subrecords_leaves_fields_empty(self):
        result = parse_gedcom_content("0 @I1@ INDI\n1 BIRT Y\n1 SEX F")
        individual = result.individuals["I1"]

        assert individual.birth_date is None
        assert individual.birth_place is None
        assert individual.sex == "F"


class TestFamilyTags:
    """Tests for family records."""

    def test_marriage_place_and_divorce(self):
        result = parse_gedcom_content(
            "0 @F1@ FAM\n1 HUSB @I1@\n1 WIFE @I2@\n1 MARR\n2 DATE 3 MAR 1920\n2 PLAC Marion, Indiana\n"
            "1 DIV\n2 DATE 1930\n1 CHIL @I3@\n1 CHIL @I4@"
        )
        family = result.families["F1"]

        assert family.marriage_date.month == 3
        assert family.marriage_place.region == "Indiana"
        assert family.divorce_date.year == 1930
        assert family.children == ["I3", "I4"]


class TestErrorRecovery:
    """Tests that bad lines never abort the parse."""

    def test_unrecognized_line_is_reported(self):
        result = parse_gedcom_content("0 @I1@ INDI\n1 NAME Ok /Person/\n??? broken\n0 @I2@ INDI")

        assert set(result.individuals) == {"I1", "I2"}
        assert result.errors == ["Line 3: Unrecognized line format: '??? broken'"]

    def test_unrecognized_line_ends_event_sub_records(self):
        result = parse_gedcom_content("0 @I1@ INDI\n1 BIRT\n??? broken\n2 DATE 1900\n1 SEX F")
        individual = result.individuals["I1"]

        assert individual.birth_date is None
        assert individual.sex == "F"
        assert result.errors == ["Line 3: Unrecognized line format: '??? broken'"]

    def test_handler_failure_is_recorded_and_parsing_continues(self, monkeypatch):
        def explode(lines, index):
            raise ValueError("boom")

        monkeypatch.setattr(assembler, "read_event", explode)
        result = parse_gedcom_content(
            "0 @I1@ INDI\n1 BIRT\n2 DATE 1900\n1 SEX M\n0 @I2@ INDI\n1 SEX F"
        )

        assert result.errors == ["Line 2: boom"]
        assert result.individuals["I1"].sex == "M"
        assert result.individuals["I2"].sex == "F"

    def test_empty_input(self):
        result = parse_gedcom_content("")
        assert result.individuals == {}
        assert result.families == {}
        assert result.errors == []
