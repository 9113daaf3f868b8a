import numpy as np
import pytest
from scipy import signal

from pydaptivenlms import (
    ProgressConfig,
    ReferenceFilter,
    SystemIDConfig,
    run_system_identification,
)
from pydaptivenlms._utils.metrics import db10, misalignment, misalignment_db, squared_error_db
from pydaptivenlms._utils.progress import report_iteration, report_pass_fail
from pydaptivenlms._utils.system_id import generate_uniform_input


# --- MÉTRICAS ---

def test_db10_uses_additive_floor():
    assert float(db10(0.0, eps=1e-40)) == pytest.approx(-400.0)
    assert float(db10(1.0, eps=0.0)) == pytest.approx(0.0)
    np.testing.assert_allclose(db10([1e-3, 1e-6], eps=0.0), [-30.0, -60.0])


def test_squared_error_db():
    assert squared_error_db(0.0) == pytest.approx(-400.0)
    assert squared_error_db(-0.1, eps=0.0) == pytest.approx(-20.0)


def test_misalignment():
    w_true = np.array([1.0, -1.0, 0.0, 2.0])
    assert misalignment(w_true, w_true) == 0.0
    assert misalignment(w_true, np.zeros(4)) == pytest.approx(1.0)
    assert misalignment_db(w_true, w_true) == pytest.approx(-400.0)
    with pytest.raises(ValueError):
        misalignment(w_true, np.zeros(3))
    with pytest.raises(ValueError):
        misalignment(np.zeros(4), w_true)


# --- FILTRO DE REFERÊNCIA ---

def test_reference_filter_matches_lfilter():
    rng = np.random.default_rng(5)
    w = rng.uniform(-1.0, 1.0, size=6)
    x = generate_uniform_input(rng, 200)

    plant = ReferenceFilter(w)
    y = np.array([plant.filter(xk) for xk in x])
    np.testing.assert_allclose(y, signal.lfilter(w, 1, x), rtol=1e-12, atol=1e-12)


def test_reference_filter_rejects_empty():
    with pytest.raises(ValueError):
        ReferenceFilter([])


def test_generate_uniform_input_range():
    x = generate_uniform_input(np.random.default_rng(0), 1000)
    assert x.shape == (1000,)
    assert np.all(x >= -1.0) and np.all(x < 1.0)


# --- RELATÓRIO ---

def test_report_iteration_respects_print_every(capsys):
    cfg = ProgressConfig(verbose_progress=True, print_every=2)
    for it in range(1, 6):
        report_iteration(it=it, iterations=5, misalignment_db=-1.0, squared_error_db=-2.0, cfg=cfg)
    out = capsys.readouterr().out
    assert "Iteration: 1\n" not in out
    assert "Iteration: 2\n" in out
    assert "Iteration: 4\n" in out
    assert "Iteration: 5\n" in out
    assert "Misalignment (dB): -1.000000" in out
    assert "Squared error (dB): -2.000000" in out


def test_report_iteration_silent(capsys):
    cfg = ProgressConfig(verbose_progress=False)
    report_iteration(it=1, iterations=1, misalignment_db=0.0, squared_error_db=0.0, cfg=cfg)
    assert capsys.readouterr().out == ""


def test_report_pass_fail(capsys):
    ok = report_pass_fail(
        misalignment_db=-300.0,
        squared_error_db=-100.0,
        misalignment_threshold_db=-290.0,
        squared_error_threshold_db=-290.0,
    )
    out = capsys.readouterr().out
    assert not ok
    assert "PASS: Misalignment < -290" in out
    assert "FAIL: Squared Error !< -290" in out

    assert not report_pass_fail(
        misalignment_db=float("nan"),
        squared_error_db=-300.0,
        misalignment_threshold_db=-290.0,
        squared_error_threshold_db=-290.0,
    )


# --- CENÁRIO DE ACEITAÇÃO ---

def test_default_config_reproduces_reference_scenario():
    cfg = SystemIDConfig()
    assert (cfg.step_size, cfg.regularization, cfg.n_taps, cfg.iterations) == (0.3, 1e-10, 30, 5000)
    assert cfg.misalignment_threshold_db == -290.0
    assert cfg.squared_error_threshold_db == -290.0
    assert cfg.db_epsilon == 1e-40


def test_nlms_system_identification_converges_below_290_db():
    report = run_system_identification(SystemIDConfig())

    assert report.squared_error_db.shape == (5000,)
    assert report.misalignment_db.shape == (5000,)
    assert report.final_misalignment_db < -290.0
    assert report.final_squared_error_db < -290.0
    assert report.passed
    np.testing.assert_allclose(report.adaptive_weights, report.reference_weights, atol=1e-12)

    # curva de aprendizado decrescente em média
    assert np.mean(report.misalignment_db[:100]) > np.mean(report.misalignment_db[-100:])


def test_short_run_fails_thresholds(capsys):
    cfg = SystemIDConfig(iterations=50, n_taps=8)
    report = run_system_identification(cfg, ProgressConfig(verbose_progress=True, print_every=0))
    out = capsys.readouterr().out

    assert not report.passed
    assert "Iteration: 50\n" in out
    assert "Iteration: 49\n" not in out
    assert "FAIL: Misalignment !< -290" in out


def test_system_identification_is_reproducible():
    cfg = SystemIDConfig(iterations=300, n_taps=10, seed=3)
    a = run_system_identification(cfg)
    b = run_system_identification(cfg)
    np.testing.assert_array_equal(a.outputs, b.outputs)
    np.testing.assert_array_equal(a.squared_error_db, b.squared_error_db)
    np.testing.assert_array_equal(a.adaptive_weights, b.adaptive_weights)


def test_invalid_iterations():
    with pytest.raises(ValueError):
        run_system_identification(SystemIDConfig(iterations=0))


def test_plot_system_id_results():
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from pydaptivenlms._utils.plotting import plot_system_id_results

    report = run_system_identification(SystemIDConfig(iterations=100, n_taps=5))
    fig = plot_system_id_results(report, show=False)
    assert len(fig.axes) == 3
    plt.close(fig)
