"""Tests for oversize resolution."""

import pytest

from sheetcut.nesting.splitter import (
    MAX_REFINE_ATTEMPTS,
    OversizeSplitter,
    ResolutionKind,
    SeamPolicy,
    SplitAxis,
    grid_layout,
    refine_count,
    resolve_oversize,
    strip_layout,
)

KERF = 0.125


@pytest.fixture
def splitter():
    """Create a splitter with the default seam policy."""
    return OversizeSplitter()


class TestFits:
    """Tests for parts that already fit."""

    def test_exact_stock_size(self, splitter):
        """Test part identical to stock is returned as-is."""
        resolution = splitter.resolve(48, 96, 48, 96, KERF, True)

        assert resolution.kind == ResolutionKind.FITS
        assert resolution.fits is True
        assert resolution.warning is None
        assert len(resolution.pieces) == 1
        assert resolution.pieces[0].width == 48
        assert resolution.pieces[0].length == 96
        assert resolution.pieces[0].suffix == ""

    def test_fits_even_if_split_disallowed(self, splitter):
        """Test fitting part ignores the split flag."""
        resolution = splitter.resolve(20, 30, 48, 96, KERF, False)

        assert resolution.kind == ResolutionKind.FITS


class TestStripSplit:
    """Tests for 1-D strip splits."""

    def test_long_part_split_along_length(self, splitter):
        """Test 96x200 part on 4x8 stock."""
        resolution = splitter.resolve(96, 200, 48, 96, KERF, True)

        # The 96" side only fits the 96" stock axis, so strips are capped at 48"
        assert resolution.kind == ResolutionKind.SPLIT
        assert resolution.split_axis == SplitAxis.LENGTH
        assert resolution.piece_count == 5
        assert resolution.warning == "will be split into 5 pieces"
        for piece in resolution.pieces:
            assert piece.width == 96
            assert piece.length == pytest.approx(39.9)
        assert [p.suffix for p in resolution.pieces] == [
            " [1/5]", " [2/5]", " [3/5]", " [4/5]", " [5/5]",
        ]

    def test_tie_prefers_width_split(self, splitter):
        """Test equal strip counts favor splitting the width."""
        resolution = splitter.resolve(60, 60, 48, 96, KERF, True)

        assert resolution.split_axis == SplitAxis.WIDTH
        assert resolution.piece_count == 2
        assert resolution.pieces[0].width == pytest.approx((60 - KERF) / 2)
        assert resolution.pieces[0].length == 60
        assert resolution.columns == 2
        assert resolution.rows == 1

    def test_fewer_strips_wins(self, splitter):
        """Test the axis needing fewer strips is chosen."""
        # Width split needs 3 strips of <= 30, length split needs 2
        resolution = splitter.resolve(80, 50, 30, 100, KERF, True)

        assert resolution.split_axis == SplitAxis.LENGTH
        assert resolution.piece_count == 2
        assert resolution.pieces[0].width == 80
        assert resolution.pieces[0].length == pytest.approx((50 - KERF) / 2)

    def test_split_pieces_fit_stock(self, splitter):
        """Test every strip fits the stock sheet."""
        resolution = splitter.resolve(96, 200, 48, 96, KERF, True)

        for piece in resolution.pieces:
            assert (piece.width <= 48 and piece.length <= 96) or \
                   (piece.length <= 48 and piece.width <= 96)

    @pytest.mark.parametrize("split_size,keep_size,stock,kerf", [
        (200, 96, (48, 96), 0.125),
        (150, 40, (48, 96), 0.125),
        (250, 30, (48, 96), 0.25),
        (110, 60, (48, 96), 0.0),
        (61, 47, (20, 80), 0.125),
    ])
    def test_strips_reconstruct_original(self, split_size, keep_size, stock, kerf):
        """Test strips plus seams add back up to the split dimension."""
        layout = strip_layout(split_size, keep_size, stock[0], stock[1], kerf)

        assert layout is not None
        n = layout.strip_count
        assert n * layout.strip_size + (n - 1) * kerf == pytest.approx(split_size, abs=1e-6)
        assert layout.strip_size <= layout.max_strip_size

    def test_keep_fitting_both_axes_uses_long_side(self):
        """Test kept side fitting both stock axes allows long strips."""
        layout = strip_layout(150, 40, 48, 96, KERF)

        assert layout.max_strip_size == 96
        assert layout.strip_count == 2

    def test_keep_too_large(self):
        """Test no strips when the kept side fits neither axis."""
        assert strip_layout(96, 200, 48, 96, KERF) is None


class TestGridSplit:
    """Tests for 2-D grid splits."""

    def test_grid_when_both_sides_exceed(self, splitter):
        """Test 100x200 part falls back to a grid."""
        resolution = splitter.resolve(100, 200, 48, 96, KERF, True)

        assert resolution.kind == ResolutionKind.SPLIT
        assert resolution.split_axis == SplitAxis.GRID
        assert (resolution.columns, resolution.rows) == (3, 3)
        assert resolution.piece_count == 9
        assert resolution.warning == "will be split into 3×3 grid (9 pieces)"
        assert resolution.pieces[0].width == pytest.approx((100 - 2 * KERF) / 3)
        assert resolution.pieces[0].length == pytest.approx((200 - 2 * KERF) / 3)
        assert resolution.pieces[0].suffix == " [1/9]"
        assert resolution.pieces[-1].suffix == " [9/9]"

    def test_grid_picks_fewer_cells(self):
        """Test orientation with fewer cells wins."""
        layout = grid_layout(100, 200, 48, 96, KERF)

        # (48, 96) gives 3 x 3, (96, 48) gives 2 x 5
        assert layout.total == 9

    def test_grid_impossible(self):
        """Test grid rejected when cells would be too small."""
        assert grid_layout(100, 100, 0.5, 0.5, 0.0) is None


class TestUnsplittable:
    """Tests for parts that cannot be resolved."""

    def test_split_disallowed(self, splitter):
        """Test oversized part with splitting turned off."""
        resolution = splitter.resolve(60, 110, 48, 96, KERF, False)

        assert resolution.kind == ResolutionKind.UNSPLITTABLE
        assert resolution.warning == "exceeds stock (seams not allowed)"
        assert resolution.pieces[0].width == 60
        assert resolution.pieces[0].length == 110

    def test_no_decomposition(self, splitter):
        """Test part that no strip or grid can cover."""
        resolution = splitter.resolve(100, 100, 0.5, 0.5, 0.0, True)

        assert resolution.kind == ResolutionKind.UNSPLITTABLE
        assert resolution.warning == "cannot be split to fit stock"
        assert len(resolution.pieces) == 1


class TestRefineCount:
    """Tests for the kerf refinement loop."""

    def test_converges(self):
        """Test count grows until pieces fit."""
        count, size = refine_count(96.1, 48, 2, KERF)

        # (96.1 - 0.125) / 2 = 47.9875 fits on the first try
        assert count == 2
        assert size == pytest.approx(47.9875)

    def test_grows_for_kerf(self):
        """Test kerf can force one more piece."""
        count, size = refine_count(97, 48, 2, 0.5)

        # (97 - 0.5) / 2 = 48.25 is too wide, three pieces of 32 fit
        assert count == 3
        assert size == pytest.approx(32.0)

    def test_gives_up_after_cap(self):
        """Test the loop stops after the attempt cap."""
        count, size = refine_count(100, 10, 1, 50)

        assert count == 1 + MAX_REFINE_ATTEMPTS
        assert size <= 0


class TestSeamPolicy:
    """Tests for the seam policy."""

    def test_default_allows_everything(self):
        """Test every material permits seams by default."""
        policy = SeamPolicy()

        assert policy.allows_seams("MDO") is True
        assert policy.allows_seams("Plexi/Acrylic") is True
        assert policy.allows_seams(None) is True

    def test_prohibited_material(self):
        """Test listed materials are never split."""
        policy = SeamPolicy(["Plexi/Acrylic", "glass"])

        assert policy.allows_seams("plexi/acrylic") is False
        assert policy.allows_seams("Glass ") is False
        assert policy.allows_seams("MDF") is True

    def test_splitter_can_split(self):
        """Test splitter combines policy and caller flag."""
        splitter = OversizeSplitter(SeamPolicy(["glass"]))

        assert splitter.can_split("MDO") is True
        assert splitter.can_split("MDO", allow_split=False) is False
        assert splitter.can_split("glass") is False

    def test_resolve_checks_material(self):
        """Test resolve never splits a material the policy prohibits."""
        splitter = OversizeSplitter(SeamPolicy(["glass"]))

        glass = splitter.resolve(60, 110, 48, 96, KERF, material="Glass")
        mdo = splitter.resolve(60, 110, 48, 96, KERF, material="MDO")

        assert glass.kind == ResolutionKind.UNSPLITTABLE
        assert glass.warning == "exceeds stock (seams not allowed)"
        assert mdo.kind == ResolutionKind.SPLIT

    def test_resolve_oversize_material(self):
        """Test module helper accepts a material tag."""
        assert resolve_oversize(60, 110, 48, 96, KERF, material="glass").is_split is True


class TestResolveOversize:
    """Tests for the module-level helper."""

    def test_resolve_oversize(self):
        """Test helper matches the default splitter."""
        resolution = resolve_oversize(96, 200, 48, 96, KERF)

        assert resolution.piece_count == 5

    def test_to_dict(self):
        """Test resolution serialization."""
        d = resolve_oversize(60, 60, 48, 96, KERF).to_dict()

        assert d["kind"] == "split"
        assert d["split_axis"] == "width"
        assert len(d["pieces"]) == 2
