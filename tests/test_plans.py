import pytest

from rental_engine.config import (
    BROKERAGE_TEMPLATE,
    PLAN_TEMPLATES,
    QUICK_TEMPLATE,
    PlanSpec,
    PlanTemplate,
    ScheduleStep,
    get_template,
)
from rental_engine.services.plans import generate_plans

BASE_RENT = 1_000_000


@pytest.mark.parametrize("template", [BROKERAGE_TEMPLATE, QUICK_TEMPLATE])
def test_plans_are_ordered_with_decreasing_commission(template):
    plans = generate_plans(BASE_RENT, template=template)
    assert [plan.id for plan in plans] == ["A", "B", "C"]
    commissions = [plan.commission_percentage for plan in plans]
    assert commissions == [12, 10, 8]


@pytest.mark.parametrize("template", [BROKERAGE_TEMPLATE, QUICK_TEMPLATE])
def test_schedules_start_at_list_price_and_never_recover(template):
    for plan in generate_plans(BASE_RENT, template=template):
        first = plan.price_adjustment_schedule[0]
        assert (first.day, first.percentage_reduction, first.new_rent_clp) == (0, 0, plan.initial_rent_clp)
        reductions = [adj.percentage_reduction for adj in plan.price_adjustment_schedule]
        days = [adj.day for adj in plan.price_adjustment_schedule]
        assert reductions == sorted(reductions)
        assert days == sorted(days)
        for adj in plan.price_adjustment_schedule:
            assert adj.new_rent_clp == pytest.approx(BASE_RENT * (1 - adj.percentage_reduction / 100))


@pytest.mark.parametrize("template", [BROKERAGE_TEMPLATE, QUICK_TEMPLATE])
def test_first_price_cut_comes_later_from_a_to_c(template):
    days = [template.get(plan_id).first_reduction_day for plan_id in ("A", "B", "C")]
    assert days[0] < days[1] < days[2]


def test_brokerage_plan_a_day_22_rent():
    plan_a = generate_plans(BASE_RENT)[0]
    last = plan_a.price_adjustment_schedule[-1]
    assert last.day == 22
    assert last.new_rent_clp == pytest.approx(880_000)
    assert plan_a.final_rent_clp == pytest.approx(880_000)


def test_templates_are_kept_distinct():
    assert [s.day for s in BROKERAGE_TEMPLATE.get("A").steps] == [0, 7, 15, 22]
    assert [s.reduction for s in QUICK_TEMPLATE.get("A").steps] == [0, 5, 8, 10]
    assert [s.reduction for s in QUICK_TEMPLATE.get("C").steps] == [0, 15]
    assert set(PLAN_TEMPLATES) == {"brokerage", "quick"}
    assert get_template("quick") is QUICK_TEMPLATE
    with pytest.raises(ValueError):
        get_template("weekly")


def test_commission_override():
    plans = generate_plans(BASE_RENT, {"A": 15})
    assert plans[0].commission_percentage == 15
    assert plans[1].commission_percentage == 10


def test_unknown_commission_override_rejected():
    with pytest.raises(ValueError):
        generate_plans(BASE_RENT, {"D": 5})


def test_zero_base_rent_gives_zero_schedule():
    for plan in generate_plans(0):
        assert all(adj.new_rent_clp == 0 for adj in plan.price_adjustment_schedule)


def test_quick_plans_carry_service_metadata():
    plans = generate_plans(BASE_RENT, template=QUICK_TEMPLATE)
    assert [plan.success_probability_percentage for plan in plans] == [95, 85, 75]
    assert all(plan.included_services for plan in plans)


def _spec(plan_id, steps):
    return PlanSpec(plan_id=plan_id, name=plan_id, description="", service_level="basic", steps=steps)


def test_template_rejects_non_monotonic_schedule():
    good = (ScheduleStep(0, 0), ScheduleStep(10, 5))
    bad = (ScheduleStep(0, 0), ScheduleStep(10, 5), ScheduleStep(20, 2))
    with pytest.raises(ValueError):
        PlanTemplate(name="broken", plans=(_spec("A", good), _spec("B", bad), _spec("C", good)))


def test_template_requires_baseline_step():
    steps = (ScheduleStep(5, 0),)
    with pytest.raises(ValueError):
        PlanTemplate(name="broken", plans=(_spec("A", steps), _spec("B", steps), _spec("C", steps)))
