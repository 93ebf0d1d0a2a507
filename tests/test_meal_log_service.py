"""Tests for meal log service."""

from uuid import uuid4

import pytest

from calorie_tracker.errors import ErrorKind, TrackerError
from calorie_tracker.services.aggregation import daily_totals
from calorie_tracker.services.meals import MealLogService
from tests.conftest import InMemoryMealLogRepository, make_caller

BREAKFAST = {
    "meal": "Breakfast",
    "calories": 300,
    "protein": 20,
    "carbs": 30,
    "fats": 10,
    "date": "2024-01-15",
}
LUNCH = {
    "meal": "Lunch",
    "calories": 500,
    "protein": 30,
    "carbs": 50,
    "fats": 15,
    "date": "2024-01-15",
}


def _service() -> tuple[MealLogService, InMemoryMealLogRepository]:
    repository = InMemoryMealLogRepository()
    return MealLogService(repository), repository


def test_create_assigns_owner_from_caller() -> None:
    service, repository = _service()
    caller = make_caller()

    meal = service.create(caller, {**BREAKFAST, "user_id": str(uuid4())})

    assert meal.user_id == caller.user_id
    assert meal.created_at == meal.updated_at
    assert repository.rows == [meal]


def test_create_negative_is_rejected_and_not_stored() -> None:
    service, repository = _service()
    payload = {**BREAKFAST, "meal": "Test", "calories": -100}

    with pytest.raises(TrackerError) as exc_info:
        service.create(make_caller(), payload)

    assert exc_info.value.kind is ErrorKind.NEGATIVE_VALUE
    assert repository.rows == []


def test_create_missing_field_is_rejected_and_not_stored() -> None:
    service, repository = _service()
    payload = {key: value for key, value in BREAKFAST.items() if key != "date"}

    with pytest.raises(TrackerError) as exc_info:
        service.create(make_caller(), payload)

    assert exc_info.value.kind is ErrorKind.MISSING_FIELD
    assert repository.rows == []


def test_create_without_caller_is_unauthenticated() -> None:
    service, repository = _service()

    with pytest.raises(TrackerError) as exc_info:
        service.create(None, BREAKFAST)

    assert exc_info.value.kind is ErrorKind.UNAUTHENTICATED
    assert repository.rows == []


def test_list_returns_newest_first_for_owner_only() -> None:
    service, _ = _service()
    caller = make_caller()
    first = service.create(caller, BREAKFAST)
    second = service.create(caller, LUNCH)
    service.create(make_caller(), BREAKFAST)

    meals = service.list_all(caller)

    assert [meal.id for meal in meals] == [second.id, first.id]


def test_list_by_date_is_exact_owner_subset() -> None:
    service, _ = _service()
    caller = make_caller()
    breakfast = service.create(caller, BREAKFAST)
    lunch = service.create(caller, LUNCH)
    service.create(caller, {**LUNCH, "date": "2024-01-16"})
    service.create(make_caller(), BREAKFAST)

    meals = service.list_by_date(caller, "2024-01-15")

    assert {meal.id for meal in meals} == {breakfast.id, lunch.id}


def test_daily_totals_for_owner_and_date() -> None:
    service, _ = _service()
    caller = make_caller()
    service.create(caller, BREAKFAST)
    service.create(caller, LUNCH)

    totals = daily_totals(service.list_by_date(caller, "2024-01-15"))

    assert (totals.calories, totals.protein, totals.carbs, totals.fats) == (
        800,
        50,
        80,
        25,
    )


def test_foreign_and_missing_records_are_not_found() -> None:
    service, repository = _service()
    owner = make_caller()
    intruder = make_caller()
    meal = service.create(owner, BREAKFAST)

    for meal_id in (meal.id, uuid4()):
        with pytest.raises(TrackerError) as get_exc:
            service.get(intruder, meal_id)
        with pytest.raises(TrackerError) as update_exc:
            service.update(intruder, meal_id, {"calories": 1})
        with pytest.raises(TrackerError) as delete_exc:
            service.delete(intruder, meal_id)
        assert get_exc.value.kind is ErrorKind.NOT_FOUND
        assert update_exc.value.kind is ErrorKind.NOT_FOUND
        assert delete_exc.value.kind is ErrorKind.NOT_FOUND
        assert get_exc.value.message == delete_exc.value.message

    assert repository.rows == [meal]


def test_update_foreign_record_is_not_found_before_validation() -> None:
    service, _ = _service()
    meal = service.create(make_caller(), BREAKFAST)

    with pytest.raises(TrackerError) as exc_info:
        service.update(make_caller(), meal.id, {"calories": -10})

    assert exc_info.value.kind is ErrorKind.NOT_FOUND


def test_update_applies_only_provided_fields() -> None:
    service, _ = _service()
    caller = make_caller()
    meal = service.create(caller, BREAKFAST)

    updated = service.update(caller, meal.id, {"calories": 350, "meal": "Brunch"})

    assert updated.calories == 350
    assert updated.meal == "Brunch"
    assert updated.protein == meal.protein
    assert updated.date == meal.date
    assert updated.user_id == caller.user_id
    assert updated.updated_at >= meal.updated_at


def test_update_negative_field_is_rejected() -> None:
    service, _ = _service()
    caller = make_caller()
    meal = service.create(caller, BREAKFAST)

    with pytest.raises(TrackerError) as exc_info:
        service.update(caller, meal.id, {"fats": -1})

    assert exc_info.value.kind is ErrorKind.NEGATIVE_VALUE
    assert exc_info.value.message == "Fats cannot be negative"
    assert service.get(caller, meal.id).fats == 10


def test_delete_removes_record_permanently() -> None:
    service, repository = _service()
    caller = make_caller()
    meal = service.create(caller, BREAKFAST)

    service.delete(caller, meal.id)

    assert repository.rows == []
    with pytest.raises(TrackerError) as exc_info:
        service.get(caller, meal.id)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


def test_reads_without_caller_are_unauthenticated() -> None:
    service, _ = _service()

    with pytest.raises(TrackerError) as list_exc:
        service.list_all(None)
    with pytest.raises(TrackerError) as date_exc:
        service.list_by_date(None, "2024-01-15")

    assert list_exc.value.kind is ErrorKind.UNAUTHENTICATED
    assert date_exc.value.kind is ErrorKind.UNAUTHENTICATED
