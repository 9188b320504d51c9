"""Tests for Markdown word counting."""

import pytest

from mdreader.markdown.wordcount import count_words, remove_markdown_formatting


class TestRemoveMarkdownFormatting:
    """Tests for remove_markdown_formatting."""

    def test_strips_fenced_code(self):
        """Test that fenced code blocks are removed entirely."""
        text = "before\n```python\nprint('hi')\n```\nafter"
        clean = remove_markdown_formatting(text)

        assert "print" not in clean
        assert "before" in clean
        assert "after" in clean

    def test_strips_inline_code(self):
        """Test that inline code spans are removed."""
        assert remove_markdown_formatting("run `make test` now").split() == ["run", "now"]

    def test_strips_heading_markers(self):
        """Test that heading markers are removed but the text kept."""
        assert remove_markdown_formatting("### Deep Title").strip() == "Deep Title"

    def test_keeps_link_label(self):
        """Test that links are reduced to their label."""
        clean = remove_markdown_formatting("see [the docs](https://example.com) here")
        assert clean == "see the docs here"

    def test_removes_image_with_alt_text(self):
        """Test that images are removed including their alt text."""
        clean = remove_markdown_formatting("a ![diagram of flow](img.png) b")
        assert clean.split() == ["a", "b"]
        assert "!" not in clean

    def test_keeps_emphasised_text(self):
        """Test that bold and italic markers are removed."""
        clean = remove_markdown_formatting("**bold** and _italic_ and __strong__ *em*")
        assert clean == "bold and italic and strong em"

    def test_strips_html_tags(self):
        """Test that raw HTML tags are removed."""
        assert remove_markdown_formatting("<b>bold</b> <br/>text") == "bold text"


class TestCountWords:
    """Tests for count_words."""

    def test_empty_string(self):
        """Test that an empty string has no words."""
        assert count_words("") == 0

    def test_none(self):
        """Test that None counts as zero words."""
        assert count_words(None) == 0

    @pytest.mark.parametrize("value", [42, 3.5, ["a", "b"], {"a": 1}])
    def test_non_string(self, value):
        """Test that non-string input counts as zero words."""
        assert count_words(value) == 0

    def test_whitespace_only(self):
        """Test that whitespace-only text has no words."""
        assert count_words("   \n\t  \n") == 0

    def test_plain_text(self):
        """Test counting plain words."""
        assert count_words("one two  three\nfour") == 4

    def test_heading_and_formatting(self):
        """Test counting with heading and bold markers."""
        assert count_words("# Title\n\nSome **bold** text") == 4

    def test_code_is_not_counted(self):
        """Test that code blocks do not add words."""
        text = "Intro line\n```\nlots of code words here\n```\n"
        assert count_words(text) == 2

    def test_link_target_not_counted(self):
        """Test that link URLs are not counted as words."""
        assert count_words("[click here](https://example.com/a/very/long/url)") == 2
