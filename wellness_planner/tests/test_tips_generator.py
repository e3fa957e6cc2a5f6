from unittest.mock import patch, MagicMock

import httpx
import openai
import pytest

from wellness_planner.data_model import ClientProfile
from wellness_planner import tips_generator
from wellness_planner.tips_generator import build_tips_prompt, generate_lifestyle_tips

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


@pytest.fixture
def profile():
    return ClientProfile(
        name="Ana",
        age=34,
        gender="Femenino",
        activity_level="Ligero",
        main_goal="Sueño",
        diet_type="Otra",
        custom_diet_type="Keto",
        meal_regularity="Irregular",
        water_intake="Bajo (<1L)",
        exercise_frequency="Nunca",
        sleep_hours=5,
        sleep_quality="Mala",
        common_symptoms=["Dificultad para dormir", "Estrés o ansiedad"],
    )


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("TIPS_MODEL", raising=False)


def _completion(content):
    resp = MagicMock()
    resp.choices = [MagicMock()]
    resp.choices[0].message.content = content
    return resp


def _http_response(status):
    return httpx.Response(status, request=httpx.Request("POST", OPENAI_URL))


def test_prompt_includes_profile_details(profile):
    prompt = build_tips_prompt(profile)
    assert "**Objetivo Principal:** Sueño" in prompt
    assert "Dieta Keto" in prompt
    assert "Duerme 5 horas, calidad de sueño Mala" in prompt
    assert "Dificultad para dormir, Estrés o ansiedad" in prompt
    assert "tipo: No especificado" in prompt


def test_prompt_without_symptoms():
    prompt = build_tips_prompt(ClientProfile(main_goal="Energía", diet_type="Vegana"))
    assert "Ninguno reportado" in prompt
    assert "Dieta Vegana" in prompt


def test_missing_api_key_skips_call(profile, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with patch.object(tips_generator, "OpenAI") as mock_openai:
        assert generate_lifestyle_tips(profile) == tips_generator.MISSING_KEY_MESSAGE
    mock_openai.assert_not_called()


def test_returns_stripped_tips(profile, api_key):
    with patch.object(tips_generator, "OpenAI") as mock_openai:
        client = mock_openai.return_value
        client.chat.completions.create.return_value = _completion("\n- **Prioriza** tu descanso\n")

        tips = generate_lifestyle_tips(profile)

    assert tips == "- **Prioriza** tu descanso"
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["temperature"] == 0.75
    assert kwargs["messages"][1]["content"] == build_tips_prompt(profile)


def test_model_from_environment(profile, api_key, monkeypatch):
    monkeypatch.setenv("TIPS_MODEL", "gemini-2.5-flash")
    with patch.object(tips_generator, "OpenAI") as mock_openai:
        client = mock_openai.return_value
        client.chat.completions.create.return_value = _completion("ok")
        generate_lifestyle_tips(profile)
    assert client.chat.completions.create.call_args.kwargs["model"] == "gemini-2.5-flash"


@pytest.mark.parametrize("content", [None, "   "])
def test_empty_response_message(profile, api_key, content):
    with patch.object(tips_generator, "OpenAI") as mock_openai:
        mock_openai.return_value.chat.completions.create.return_value = _completion(content)
        assert generate_lifestyle_tips(profile) == tips_generator.EMPTY_RESPONSE_MESSAGE


@pytest.mark.parametrize("error, expected", [
    (lambda: openai.AuthenticationError("bad key", response=_http_response(401), body=None),
     tips_generator.INVALID_KEY_MESSAGE),
    (lambda: openai.RateLimitError("quota", response=_http_response(429), body=None),
     tips_generator.QUOTA_MESSAGE),
    (lambda: openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL)),
     tips_generator.RETRY_MESSAGE),
])
def test_api_errors_map_to_fallback_messages(profile, api_key, error, expected):
    with patch.object(tips_generator, "OpenAI") as mock_openai:
        mock_openai.return_value.chat.completions.create.side_effect = error()
        assert generate_lifestyle_tips(profile) == expected


def test_client_deadline_follows_tips_timeout(profile, api_key, monkeypatch):
    monkeypatch.setenv("TIPS_TIMEOUT_SECONDS", "12")
    with patch.object(tips_generator, "OpenAI") as mock_openai:
        mock_openai.return_value.chat.completions.create.return_value = _completion("ok")
        generate_lifestyle_tips(profile)
    mock_openai.assert_called_once_with(timeout=12.0, max_retries=0)


@pytest.mark.parametrize("raw, expected", [(None, 30.0), ("7.5", 7.5), ("soon", 30.0)])
def test_tips_timeout_seconds(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("TIPS_TIMEOUT_SECONDS", raising=False)
    else:
        monkeypatch.setenv("TIPS_TIMEOUT_SECONDS", raw)
    assert tips_generator.tips_timeout_seconds() == expected
