import pytest

from sumcheck_toolkit.analysis.demo import main as soundness_main
from sumcheck_toolkit.config import (
    ProtocolConfig,
    create_goldilocks_config,
    create_small_field_config,
)
from sumcheck_toolkit.main import main


def test_cli_accepts_example(capsys):
    assert main(["--claimed-sum", "12", "--seed", "1"]) == 0
    assert capsys.readouterr().out.strip().endswith("ACCEPT")


def test_cli_defaults_to_true_sum(capsys):
    assert main(["--poly", "x0*x1 + 3*x2", "--field", "goldilocks", "--seed", "2"]) == 0
    assert "claiming the true sum 14" in capsys.readouterr().out


def test_cli_rejects_wrong_sum(capsys):
    assert main(["--claimed-sum", "13", "--seed", "1"]) == 1
    out = capsys.readouterr().out
    assert "consistency_mismatch" in out
    assert out.strip().endswith("REJECT")


def test_cli_global_degree_bound(capsys):
    assert main(["--claimed-sum", "12", "--degree-bound", "2", "--seed", "1"]) == 1
    assert "degree_bound_exceeded" in capsys.readouterr().out


def test_cli_malformed_claim(capsys):
    assert main(["--poly", "x0*x5", "--num-vars", "2"]) == 2
    assert "malformed_claim" in capsys.readouterr().out


def test_cli_non_ascii_digits_are_malformed(capsys):
    assert main(["--poly", "²*x0"]) == 2
    assert "malformed_claim" in capsys.readouterr().out


def test_cli_bad_degree_bound():
    with pytest.raises(SystemExit):
        main(["--degree-bound", "-1"])


def test_soundness_demo_runs(capsys):
    assert soundness_main(["--claims", "3", "--trials", "50", "--seed", "1"]) == 0
    assert "ANALYSIS COMPLETE" in capsys.readouterr().out


def test_config_presets_and_validation():
    assert create_small_field_config().field.prime == 97
    assert create_goldilocks_config(seed=3).create_rng().seed == 3
    assert ProtocolConfig().bound_policy == "per-variable"
    assert ProtocolConfig(degree_bound=2).bound_policy == "global"
    assert "Degree bound: global <= 2" in ProtocolConfig(degree_bound=2).summary()
    with pytest.raises(ValueError):
        ProtocolConfig(prime=1)
