import pytest

import graphtheory.__main__ as cli


def test_main_reports_konigsberg(capsys):
    cli.main(["konigsberg"])

    out = capsys.readouterr().out
    assert "konigsberg:" in out
    assert "  edges: 7" in out
    assert "  eulerian: no" in out
    assert "  odd-degree vertices: A, B, C, D" in out
    assert "icosian:" not in out


def test_main_checks_the_icosian_tour(capsys):
    cli.main(["icosian", "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert "  vertices: 20" in out
    assert "  reference tour is hamiltonian: yes" in out


def test_main_reports_every_graph_by_default(capsys):
    cli.main([])

    out = capsys.readouterr().out
    for name in ("icosian:", "konigsberg:", "planar:"):
        assert name in out


def test_main_rejects_unknown_graphs():
    with pytest.raises(SystemExit):
        cli.main(["petersen"])


def test_search_limit_is_reported_not_raised(monkeypatch, capsys):
    def _give_up(self, edge_ids=None):
        raise cli.SearchLimitExceeded("gave up")

    monkeypatch.setattr(cli.Graph, "has_cycle", _give_up)

    cli.main(["planar"])

    assert "  has cycle: unknown" in capsys.readouterr().out
