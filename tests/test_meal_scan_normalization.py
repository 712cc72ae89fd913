# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from unittest import mock

from fitcoach.genai.client import GenAIError
from fitcoach.genai.parsing import extract_text_from_completion, parse_model_json
from fitcoach.meal_scans import vision
from fitcoach.meal_scans.models import MealScanResult
from fitcoach.meal_scans.vision import GenAIMealAnalyzer, build_user_prompt, normalize_meal_result


class TestModelJsonParsing(unittest.TestCase):
    def test_fenced_json_with_trailing_commas(self) -> None:
        content = "```json\n{\"totalCalories\": 520, \"ingredients\": [{\"name\": \"rice\"},],}\n```"
        parsed = parse_model_json(content)
        self.assertEqual(parsed["totalCalories"], 520)
        self.assertEqual(parsed["ingredients"], [{"name": "rice"}])

    def test_json_inside_prose(self) -> None:
        parsed = parse_model_json("Sure! Here it is: {\"a\": {\"b\": \"}\"}} Enjoy.")
        self.assertEqual(parsed, {"a": {"b": "}"}})

    def test_no_object_raises(self) -> None:
        with self.assertRaises(ValueError):
            parse_model_json("I cannot see any food in this picture.")

    def test_completion_content_parts(self) -> None:
        data = {"choices": [{"message": {"content": [{"type": "text", "text": "Hello "}, {"text": "coach"}]}}]}
        self.assertEqual(extract_text_from_completion(data), "Hello coach")
        self.assertEqual(extract_text_from_completion({"error": "x"}), "")


class TestMealResultNormalization(unittest.TestCase):
    def test_camel_case_and_units(self) -> None:
        result = normalize_meal_result(
            {
                "totalCalories": "~650 kcal",
                "caloriesRange": {"min": 550, "max": "750"},
                "macros": {"protein": "32g", "carbohydrates": "70 g", "fat": 18},
                "ingredients": [
                    {"name": "Chicken", "portion": "150 g", "macroRole": "protein"},
                    {"name": "  ", "portion": "?"},
                    "rice",
                ],
                "confidence": "HIGH",
            }
        )
        self.assertEqual(result.total_calories, 650.0)
        self.assertEqual(result.calories_range.max, 750.0)
        self.assertEqual(result.macros.protein_grams, 32.0)
        self.assertEqual(result.macros.carbs_grams, 70.0)
        self.assertEqual(result.macros.fat_grams, 18.0)
        self.assertEqual([i.name for i in result.ingredients], ["Chicken"])
        self.assertEqual(result.ingredients[0].estimated_portion, "150 g")
        self.assertEqual(result.confidence, "high")

    def test_missing_fields_take_defaults(self) -> None:
        result = normalize_meal_result({})
        self.assertEqual(result.total_calories, 0.0)
        self.assertEqual(result.macros.protein_grams, 0.0)
        self.assertEqual(result.ingredients, [])
        self.assertEqual(result.confidence, "medium")

    def test_unusable_shape_raises_value_error(self) -> None:
        with self.assertRaises(ValueError):
            normalize_meal_result({"macros": "lots of protein"})

    def test_prompt_names_the_language(self) -> None:
        prompt = build_user_prompt("post-workout", "fr")
        self.assertIn("French", prompt)
        self.assertIn("post-workout", prompt)


class TestGenAIMealAnalyzer(unittest.TestCase):
    def test_malformed_answer_becomes_genai_error(self) -> None:
        with mock.patch.object(vision, "resolve_genai_settings"), mock.patch.object(
            vision, "chat_completion", return_value="no json here"
        ):
            with self.assertRaises(GenAIError):
                GenAIMealAnalyzer().analyze(image_bytes=b"img", image_mime="image/png", notes=None, language="en")

    def test_answer_is_normalized(self) -> None:
        answer = "{\"calories\": 400, \"macros\": {\"proteinGrams\": 25}, \"ingredients\": []}"
        with mock.patch.object(vision, "resolve_genai_settings"), mock.patch.object(
            vision, "chat_completion", return_value=answer
        ) as call:
            result = GenAIMealAnalyzer().analyze(image_bytes=b"img", image_mime="image/png", notes="lunch", language="es")
        self.assertIsInstance(result, MealScanResult)
        self.assertEqual(result.total_calories, 400.0)
        self.assertEqual(result.macros.protein_grams, 25.0)
        messages = call.call_args.args[0]
        image_part = messages[1]["content"][1]
        self.assertTrue(image_part["image_url"]["url"].startswith("data:image/png;base64,"))


if __name__ == "__main__":
    unittest.main()
