import unittest
from datetime import date

from exercise_tracker.db import ExerciseRecord
from exercise_tracker.errors import InvalidInputError
from exercise_tracker.schemas import AddExercisePayload, CreateUserPayload, parse_payload


class CreateUserPayloadTests(unittest.TestCase):
    def test_username_is_trimmed(self):
        payload = parse_payload(CreateUserPayload, {"username": "  alice "})
        self.assertEqual(payload.username, "alice")

    def test_missing_username(self):
        for body in ({}, {"username": None}, {"username": ""}, {"username": ["a"]}):
            with self.subTest(body=body):
                with self.assertRaises(InvalidInputError) as ctx:
                    parse_payload(CreateUserPayload, body)
                self.assertEqual(ctx.exception.message, "username is required")
                self.assertEqual(ctx.exception.status_code, 400)


class AddExercisePayloadTests(unittest.TestCase):
    def test_fields_are_coerced(self):
        payload = parse_payload(
            AddExercisePayload,
            {"description": " run ", "duration": "30min", "date": "2024/01/05"},
        )
        self.assertEqual(payload.description, "run")
        self.assertEqual(payload.duration, 30)
        self.assertEqual(payload.date, date(2024, 1, 5))

    def test_missing_date_uses_today(self):
        payload = parse_payload(
            AddExercisePayload, {"description": "run", "duration": 10, "date": " "}
        )
        self.assertIsNone(payload.date)
        self.assertEqual(
            payload.to_record(date(2023, 6, 15)),
            ExerciseRecord("run", 10, date(2023, 6, 15)),
        )

    def test_rejected_fields(self):
        cases = [
            ({"duration": 10}, "description is required"),
            ({"description": "run"}, "Invalid duration"),
            ({"description": "run", "duration": "soon"}, "Invalid duration"),
            ({"description": "run", "duration": 5, "date": "someday"}, "Invalid date"),
            ({"description": "run", "duration": 5, "date": 20240105}, "Invalid date"),
        ]
        for body, message in cases:
            with self.subTest(body=body):
                with self.assertRaises(InvalidInputError) as ctx:
                    parse_payload(AddExercisePayload, body)
                self.assertEqual(ctx.exception.message, message)


if __name__ == "__main__":
    unittest.main()
