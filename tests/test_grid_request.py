"""Unit tests for DataTables parameter parsing (GridRequest.from_args)."""

from werkzeug.datastructures import MultiDict

from services.grid_service import GridRequest


def parse(args: dict, **kwargs) -> GridRequest:
    return GridRequest.from_args(MultiDict(args), default_length=10, max_length=500, **kwargs)


class TestDefaults:
    """Missing or malformed values fall back to defaults, never errors."""

    def test_empty_request(self) -> None:
        """An empty query string yields the documented defaults."""
        req = parse({})
        assert req.draw == 1
        assert req.start == 0
        assert req.length == 10
        assert req.order_column is None
        assert req.order_dir is None
        assert req.search == ""
        assert dict(req.column_search) == {}

    def test_garbage_values(self) -> None:
        """Non-numeric draw/start/length are defaulted."""
        req = parse({"draw": "abc", "start": "x", "length": "ten", "order[0][column]": "first"})
        assert req.draw == 1
        assert req.start == 0
        assert req.length == 10
        assert req.order_column is None

    def test_draw_is_echoed_as_int(self) -> None:
        """A numeric draw is kept unchanged."""
        assert parse({"draw": "7"}).draw == 7

    def test_negative_start_becomes_zero(self) -> None:
        """Negative offsets are clamped to 0."""
        assert parse({"start": "-20"}).start == 0

    def test_huge_start_is_clamped(self) -> None:
        """Offsets beyond the database integer range are clamped, not rejected."""
        assert parse({"start": "99999999999999999999"}).start == 2**63 - 1


class TestLength:
    """Page length clamping."""

    def test_show_all_is_clamped(self) -> None:
        """length=-1 (show all) uses the configured maximum."""
        assert parse({"length": "-1"}).length == 500

    def test_above_max_is_clamped(self) -> None:
        """Lengths above the maximum are clamped."""
        assert parse({"length": "100000"}).length == 500

    def test_zero_uses_default(self) -> None:
        """length=0 falls back to the default page size."""
        assert parse({"length": "0"}).length == 10

    def test_regular_value(self) -> None:
        """A sane value passes through."""
        assert parse({"length": "25"}).length == 25


class TestOrderAndSearch:
    """Sort direction and search values."""

    def test_direction_is_restricted(self) -> None:
        """Only asc/desc are accepted, case-insensitively."""
        assert parse({"order[0][dir]": "DESC"}).order_dir == "desc"
        assert parse({"order[0][dir]": "asc"}).order_dir == "asc"
        assert parse({"order[0][dir]": "desc; DROP TABLE student"}).order_dir is None

    def test_order_column_index(self) -> None:
        """The requested column index is parsed as an int."""
        assert parse({"order[0][column]": "3"}).order_column == 3

    def test_global_search_is_trimmed(self) -> None:
        """Global search text is stripped."""
        assert parse({"search[value]": "  ana  "}).search == "ana"

    def test_column_searches(self) -> None:
        """Only non-empty per-column searches are collected, keyed by index."""
        req = parse(
            {
                "columns[0][search][value]": "",
                "columns[2][search][value]": "smith",
                "columns[5][search][value]": "inactive",
                "columns[1][data]": "1",
            }
        )
        assert dict(req.column_search) == {2: "smith", 5: "inactive"}

    def test_entity_filters(self) -> None:
        """Only the declared entity filters are kept."""
        req = parse({"term_fk": "4", "status": "", "other": "x"}, filter_names=("term_fk", "status"))
        assert dict(req.filters) == {"term_fk": "4"}
