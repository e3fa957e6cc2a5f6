import pytest
from pydantic import ValidationError

from wellness_planner.intake_form import (
    ClientIntake,
    FORM_STEPS,
    form_options,
    validate_all_steps,
    validate_step,
)


def valid_answers():
    return {
        "name": "Ana López",
        "age": 34,
        "gender": "Femenino",
        "phone": "+51 987 654 321",
        "email": "ana@example.com",
        "occupation": "Diseñadora",
        "activityLevel": "Moderado",
        "mainGoal": "Energía",
        "priorityGoalDetails": "Me siento cansada por las tardes",
        "dietType": "Equilibrada",
        "mealRegularity": "Irregular",
        "waterIntake": "Bajo (<1L)",
        "exerciseFrequency": "1-2 veces/sem",
        "exerciseType": "Caminar",
        "sleepHours": 6,
        "sleepQuality": "Regular",
        "commonSymptoms": ["Fatiga o cansancio constante", "Estrés o ansiedad"],
        "medicalConditions": "",
        "currentMedications": "",
        "additionalInfo": "",
    }


def test_all_steps_valid():
    assert validate_all_steps(valid_answers()) == {}


def test_snake_case_keys_accepted():
    answers = {"activity_level": "Activo", "name": "Luis", "age": "40", "gender": "Masculino",
               "phone": "987654321", "email": "luis@example.com"}
    assert validate_step(1, answers) == {}


def test_required_fields_reported():
    errors = validate_step(1, {"name": "  ", "email": "ana@example.com"})
    assert set(errors) == {"name", "age", "gender", "phone", "activity_level"}
    assert errors["name"] == "Este campo es obligatorio."


def test_optional_fields_may_be_blank():
    answers = valid_answers()
    answers["occupation"] = ""
    assert "occupation" not in validate_step(1, answers)


@pytest.mark.parametrize("age", [0, 121, "abc", 33.5])
def test_age_out_of_range(age):
    answers = valid_answers()
    answers["age"] = age
    assert "age" in validate_step(1, answers)


@pytest.mark.parametrize("email", ["ana", "ana@", "ana@example", "a b@example.com"])
def test_invalid_email(email):
    answers = valid_answers()
    answers["email"] = email
    assert "email" in validate_step(1, answers)


@pytest.mark.parametrize("phone", ["12345", "telefono", "1234567890123456"])
def test_invalid_phone(phone):
    answers = valid_answers()
    answers["phone"] = phone
    assert "phone" in validate_step(1, answers)


def test_goal_must_be_known():
    answers = valid_answers()
    answers["mainGoal"] = "Volar"
    assert "main_goal" in validate_step(2, answers)


def test_other_diet_requires_description():
    answers = valid_answers()
    answers["dietType"] = "Otra"
    assert "custom_diet_type" in validate_step(3, answers)
    answers["customDietType"] = "Keto"
    assert validate_step(3, answers) == {}


def test_sleep_hours_range():
    answers = valid_answers()
    answers["sleepHours"] = 25
    assert "sleep_hours" in validate_step(3, answers)
    answers["sleepHours"] = 0
    assert "sleep_hours" not in validate_step(3, answers)


def test_unknown_symptom_rejected():
    answers = valid_answers()
    answers["commonSymptoms"] = ["Fatiga o cansancio constante", "Dolor de muelas"]
    errors = validate_step(4, answers)
    assert "Dolor de muelas" in errors["common_symptoms"]


def test_unknown_step_raises():
    with pytest.raises(ValueError):
        validate_step(9, valid_answers())


def test_form_options_lists_steps_and_enums():
    options = form_options()
    assert [s["id"] for s in options["steps"]] == [s.id for s in FORM_STEPS]
    assert "Rendimiento Deportivo" in options["health_goals"]
    assert "Muy Activo" in options["activity_levels"]


def test_intake_to_profile():
    answers = valid_answers()
    answers["commonSymptoms"] = ["Estrés o ansiedad", "Estrés o ansiedad", "Antojos de dulce"]
    profile = ClientIntake(**answers).to_profile()
    assert profile.name == "Ana López"
    assert profile.activity_level == "Moderado"
    assert profile.main_goal == "Energía"
    assert profile.common_symptoms == ["Estrés o ansiedad", "Antojos de dulce"]


def test_intake_rejects_invalid_answers():
    answers = valid_answers()
    answers["email"] = "no-es-correo"
    with pytest.raises(ValidationError):
        ClientIntake(**answers)


def test_webhook_payload_joins_symptoms():
    payload = ClientIntake(**valid_answers()).webhook_payload()
    assert payload["commonSymptoms"] == "Fatiga o cansancio constante, Estrés o ansiedad"
    assert payload["mainGoal"] == "Energía"
