"""
Unit tests for text rendering.
"""
from minefield.render import Style, render_text, tile_glyph


class TestTileGlyph:
    """Test glyph and style per tile state."""

    def test_covered_tile(self, corner_board) -> None:
        assert tile_glyph(corner_board, 0, 0) == ("#", Style.DEFAULT)

    def test_flagged_tile(self, corner_board) -> None:
        corner_board.toggle_flag(1, 0)
        assert tile_glyph(corner_board, 1, 0) == ("^", Style.FLAG)

    def test_numbers_and_blank(self, top_corners_board) -> None:
        """Counts show as digits with per-count colours, zero as blank."""
        top_corners_board.reveal(1, 1)
        top_corners_board.reveal(1, 2)
        assert tile_glyph(top_corners_board, 1, 1) == ("2", Style.TWO)
        assert tile_glyph(top_corners_board, 1, 2) == (" ", Style.DEFAULT)

    def test_mine_after_loss(self, corner_board) -> None:
        corner_board.reveal(2, 2)
        glyph, style = tile_glyph(corner_board, 2, 2)
        assert glyph == "*"
        assert style is Style.MINE
        assert style.bold is True


class TestRenderText:
    """Test whole-board rendering."""

    def test_new_board(self, corner_board) -> None:
        assert render_text(corner_board) == "###\n###\n###"

    def test_cursor_marker(self, corner_board) -> None:
        assert render_text(corner_board, cursor=(1, 2)) == "###\n###\n#X#"

    def test_won_board(self, corner_board) -> None:
        """A won board shows counts and the auto-placed flag."""
        corner_board.reveal(0, 0)
        assert render_text(corner_board) == "   \n 11\n 1^"
