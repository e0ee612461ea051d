import pytest

from rental_engine.config import (
    BROKERAGE_FLOW,
    QUICK_FLOW,
    EngineConfig,
    FlowConfig,
    validate_config,
)


def test_default_config_is_valid():
    config = EngineConfig(uf_value_clp=38000)
    assert validate_config(config) == (True, [])
    assert dict(config.commissions) == {"A": 12, "B": 10, "C": 8}


def test_soft_checks_report_problems():
    ok, errors = validate_config(EngineConfig(uf_value_clp=1000, commissions={"A": 30, "B": 10, "C": 8}))
    assert not ok
    assert len(errors) == 2


def test_commission_defaults_must_decrease():
    with pytest.raises(ValueError):
        EngineConfig(commissions={"A": 10, "B": 10, "C": 8})
    with pytest.raises(ValueError):
        EngineConfig(commissions={"A": 12, "B": 10})


def test_flows_are_looked_up_by_name():
    config = EngineConfig()
    assert config.flow("brokerage") is BROKERAGE_FLOW
    assert config.flow("quick") is QUICK_FLOW
    with pytest.raises(ValueError):
        config.flow("express")


def test_flow_policy_must_cover_every_plan():
    with pytest.raises(ValueError):
        FlowConfig(
            name="partial",
            template=BROKERAGE_FLOW.template,
            thresholds=BROKERAGE_FLOW.thresholds,
            policy={"A": BROKERAGE_FLOW.policy["A"]},
            neighborhood=BROKERAGE_FLOW.neighborhood,
        )


def test_configuration_is_immutable():
    config = EngineConfig()
    with pytest.raises(AttributeError):
        config.uf_value_clp = 1
    with pytest.raises(TypeError):
        config.commissions["A"] = 20
