"""System prompts for the dietitian chat and one-shot recommendations."""

from __future__ import annotations

from typing import Any, Iterable, Mapping


def chat_system_prompt(intent: str, calories: int | None, allergies: Iterable[str]) -> str:
    allergy_list = ", ".join(allergies) or "None"
    return f"""
You are a professional dietitian assistant.
USER PROFILE: Goal is {intent}, Calories: {calories or 'not set'}.
STRICT ALLERGY LIST: {allergy_list}.

STRICT RULES:
- If a user mentions a food from their allergy list or any related form of it (e.g., oatmeal for an oat allergy), you MUST refuse and warn them.
- Refer to the chat history to stay consistent. If they asked for a plan previously, build upon it.
- No markdown, no bullets, no emojis.
- Sound calm, human, and professional.
"""


def recommend_system_prompt(
    profile: Mapping[str, Any],
    target_calories: int,
    kind: str | None,
    query: str,
    totals: Mapping[str, float] | None = None,
) -> str:
    prompt = (
        "You are 'Dr. Malak', a certified clinical dietitian and fitness coach.\n"
        f"User Profile: Goal: {profile.get('goal')}, Age: {profile.get('age')}, "
        f"Gender: {profile.get('gender')}, Activity: {profile.get('activity_level')}.\n"
    )
    if totals is not None:
        remaining = target_calories - totals.get("calories", 0)
        prompt += (
            f"Eaten today: {round(totals.get('calories', 0))} kcal, "
            f"{round(totals.get('protein', 0))} g protein. "
            f"Remaining today: {round(remaining)} kcal.\n"
        )

    if kind == "plan":
        prompt += (
            "Create a 1-day meal plan (Breakfast, Lunch, Dinner, Snack) for "
            f"Middle Eastern cuisine fitting {target_calories} kcal."
        )
    elif kind == "recipe":
        prompt += f'Suggest a healthy Middle Eastern recipe for: "{query}". Include calories.'
    elif kind == "challenge":
        prompt += (
            "Create a fun, motivating 30-day fitness or nutrition challenge title "
            "and description for this user.\n"
            f"Focus on their goal of {profile.get('goal')}.\n"
            "The output should be inspiring and sound like a community event."
        )
    else:
        prompt += "Answer concisely."
    return prompt
