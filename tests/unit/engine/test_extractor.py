"""Tests for the text extractor."""

from __future__ import annotations

from rpg_engine.engine.extractor import extract_sections, sanitize_narrative


class TestExtractSections:
    """Tests for splitting a reply into its sections."""

    def test_both_sections(self) -> None:
        """Test a well-formed reply."""
        sections = extract_sections(
            'NARRATIVE: You enter the cave.\nSTATE_CHANGES: {"experience": 5}'
        )

        assert sections.narrative == "You enter the cave."
        assert sections.state_changes_text == '{"experience": 5}'

    def test_missing_narrative_marker(self) -> None:
        """Test that a reply without markers is all narrative."""
        sections = extract_sections("The wind howls through the pass.")

        assert sections.narrative == "The wind howls through the pass."
        assert sections.state_changes_text == ""

    def test_missing_state_changes(self) -> None:
        """Test a narrative-only reply."""
        sections = extract_sections("NARRATIVE: Nothing happens.")

        assert sections.narrative == "Nothing happens."
        assert sections.state_changes_text == ""

    def test_multiline_narrative(self) -> None:
        """Test that the narrative may span several lines."""
        sections = extract_sections(
            "NARRATIVE: First line.\nSecond line.\n\nSTATE_CHANGES: {}"
        )

        assert sections.narrative == "First line.\nSecond line."
        assert sections.state_changes_text == "{}"

    def test_empty_reply(self) -> None:
        """Test that an empty reply does not raise."""
        sections = extract_sections("")

        assert sections.narrative == ""
        assert sections.state_changes_text == ""


class TestSanitizeNarrative:
    """Tests for narrative clean-up."""

    def test_strips_heading_markers(self) -> None:
        """Test markdown headings lose their hashes on every line."""
        assert sanitize_narrative("# The Cave\n## Inside\nDark.") == "The Cave\nInside\nDark."

    def test_removes_code_blocks(self) -> None:
        """Test fenced code blocks are removed entirely."""
        text = 'You look around.\n```json\n{"health": 10}\n```'

        assert sanitize_narrative(text) == "You look around."

    def test_removes_echoed_markers(self) -> None:
        """Test stray format markers are removed case-insensitively."""
        assert sanitize_narrative("narrative: The door opens. state_changes:") == "The door opens."
