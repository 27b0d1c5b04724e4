"""Tests for run report exporters."""

import json
from pathlib import Path

from exporters.json_exporter import to_json
from model.report import RunReport


class TestJSONExporter:
    """Tests for JSON exporter."""
    
    def test_empty_report(self):
        """Test exporting a report without rounds."""
        report = RunReport(operation="remove", source=Path("/repo/core"))
        
        data = json.loads(to_json(report, Path("/repo")))
        
        assert data["operation"] == "remove"
        assert data["source"] == "core"
        assert data["rounds"] == []
        assert data["total"] == 0
        assert data["converged"] is False
    
    def test_move_report(self):
        """Test exporting a converged move report."""
        root = Path("/repo")
        report = RunReport(
            operation="move",
            source=root / "core",
            destinations=[root / "feature"],
            protected=[root / "app"],
        )
        report.add_round(2, {root / "feature": 2})
        report.add_round(0, {root / "feature": 0})
        
        data = json.loads(to_json(report, root))
        
        assert data["destinations"] == ["feature"]
        assert data["protected"] == ["app"]
        assert data["rounds"][0] == {"round": 1, "count": 2, "modules": {"feature": 2}}
        assert data["total"] == 2
        assert data["converged"] is True
        assert data["truncated"] is False
    
    def test_paths_outside_root(self):
        """Test that paths outside the root are kept as given."""
        report = RunReport(operation="remove", source=Path("/elsewhere/core"))
        
        data = json.loads(to_json(report, Path("/repo")))
        
        assert data["source"] == "/elsewhere/core"
    
    def test_truncated_report(self):
        """Test the flags of a truncated run."""
        report = RunReport(operation="move", source=Path("core"), max_rounds=1)
        report.add_round(4)
        report.truncated = True
        
        data = json.loads(to_json(report))
        
        assert data["max_rounds"] == 1
        assert data["truncated"] is True
        assert data["converged"] is False
