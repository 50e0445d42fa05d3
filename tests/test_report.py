from capacity_coverage.fleet import FleetCoverage
from capacity_coverage.report import render_table
from capacity_coverage.views import project
from capacity_coverage.views import ViewMode


def test_render_instance_table(mixed_fleet):
    output = render_table(project(mixed_fleet, ViewMode.instance))
    lines = output.splitlines()

    assert lines[0] == "EC2 Instance"
    assert "reserved_expired_count(all)" in output
    assert "m5.2xlarge" in output
    # title + 5 rows, each row has a separator line in the grid format
    assert len(lines) == 1 + 3 + 2 * 5


def test_render_keeps_formatted_cells(mixed_fleet):
    output = render_table(project(mixed_fleet, ViewMode.normalization_factor))
    assert "80.0%" in output
    assert "| 20 " in output


def test_render_empty():
    output = render_table(project(FleetCoverage(), ViewMode.instance))
    assert output == "EC2 Instance\n(no rows)"
