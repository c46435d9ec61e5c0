"""
Pure rules behind the chat: intent, allergies, reply clean-up, prompts.
"""
from core.allergies import (
    decode_allergies,
    detect_allergies,
    enforce_allergy_rules,
    merge_allergies,
)
from core.intent import active_intent, detect_intent
from core.prompts import chat_system_prompt, recommend_system_prompt
from core.text_cleanup import sanitize_text


# --- intent -------------------------------------------------------------
def test_intent_first_match_wins():
    assert detect_intent("How do I LOSE muscle?") == "weight_loss"
    assert detect_intent("best way to bulk") == "weight_gain"
    assert detect_intent("I just want to maintain") == "maintenance"
    assert detect_intent("my thyroid is off") == "medical"
    assert detect_intent("hello there") is None


def test_active_intent_falls_back_to_goal_then_general():
    assert active_intent("hello there", "gain_weight") == "gain_weight"
    assert active_intent("hello there", None) == "general"
    assert active_intent("slim down", "gain_weight") == "weight_loss"


# --- allergies ----------------------------------------------------------
def test_detect_allergies_in_vocabulary_order():
    assert detect_allergies("I'm allergic to Peanuts and milk") == ["peanut", "milk"]
    assert detect_allergies("soy milk please") == ["milk", "soy"]
    assert detect_allergies("rice and chicken") == []


def test_merge_keeps_order_and_drops_duplicates():
    assert merge_allergies(["egg", "milk"], ["milk", "fish"]) == ["egg", "milk", "fish"]


def test_enforcement_matches_alias():
    msg = enforce_allergy_rules("Can I eat Oatmeal for breakfast?", ["oats"])
    assert msg == (
        "Warning: You have a registered oats allergy. Since oatmeal is a form of oats, "
        "it is not safe for you. Please avoid this and choose a safe alternative."
    )
    assert enforce_allergy_rules("Can I eat rice?", ["oats"]) is None


def test_enforcement_unknown_allergy_matches_itself():
    assert "kiwi" in enforce_allergy_rules("is kiwi ok?", ["kiwi"])


def test_decode_allergies_is_tolerant():
    assert decode_allergies('["egg", "fish"]') == ["egg", "fish"]
    assert decode_allergies(None) == []
    assert decode_allergies("not json") == []
    assert decode_allergies('{"egg": true}') == []


# --- clean-up -----------------------------------------------------------
def test_sanitize_strips_markdown():
    raw = "## Plan\n**Breakfast**: oats\n1. Eat *slowly*\n- Drink water\n\n\n\nDone ⭐"
    assert sanitize_text(raw) == "Plan\nBreakfast: oats\nEat slowly\nDrink water\n\nDone"


# --- prompts ------------------------------------------------------------
def test_chat_prompt_mentions_profile():
    p = chat_system_prompt("weight_loss", None, [])
    assert "Goal is weight_loss, Calories: not set." in p
    assert "STRICT ALLERGY LIST: None." in p
    assert "STRICT ALLERGY LIST: egg, fish." in chat_system_prompt("general", 2000, ["egg", "fish"])


def test_recommend_prompt_by_kind():
    profile = {"goal": "lose_weight", "age": 30, "gender": "male", "activity_level": "light"}
    assert "fitting 1800 kcal" in recommend_system_prompt(profile, 1800, "plan", "")
    assert '"lentil soup"' in recommend_system_prompt(profile, 1800, "recipe", "lentil soup")
    assert "30-day" in recommend_system_prompt(profile, 1800, "challenge", "")
    assert recommend_system_prompt(profile, 1800, None, "hi").endswith("Answer concisely.")
