import unittest

from task_tracker.errors import ValidationError
from task_tracker.validators import validate_create_task, validate_task_id, validate_update_task


class ValidatorTestCase(unittest.TestCase):
    def test_create_returns_clean_fields(self):
        dto = validate_create_task({"description": " Buy milk ", "category": "Personal", "extra": 1})
        self.assertEqual(dto, {"description": " Buy milk ", "category": "Personal", "task_id": None})

    def test_create_messages_name_the_field(self):
        cases = [
            ({"category": "Personal"}, "Description"),
            ({"description": "\t\n", "category": "Personal"}, "whitespace"),
            ({"description": "x"}, "Category"),
            ({"description": "x", "category": "personal"}, "Personal, Professional"),
        ]
        for payload, fragment in cases:
            with self.assertRaises(ValidationError) as ctx:
                validate_create_task(payload)
            self.assertIn(fragment, ctx.exception.message)

    def test_create_requires_object(self):
        with self.assertRaises(ValidationError):
            validate_create_task(["description", "category"])

    def test_update_requires_a_field(self):
        with self.assertRaises(ValidationError):
            validate_update_task({"category": "Personal"})

    def test_update_completed_must_be_bool(self):
        with self.assertRaises(ValidationError):
            validate_update_task({"completed": 1})
        self.assertEqual(validate_update_task({"completed": False}), {"description": None, "completed": False})

    def test_task_id_pattern(self):
        self.assertEqual(
            validate_task_id("3F2B8C1E-9D4A-4B6F-8E2A-1C5D7E9F0A1B"),
            "3F2B8C1E-9D4A-4B6F-8E2A-1C5D7E9F0A1B",
        )
        for bad in ["", "1700000000000", "3f2b8c1e-9d4a-1b6f-8e2a-1c5d7e9f0a1b", None]:
            with self.assertRaises(ValidationError):
                validate_task_id(bad)


if __name__ == "__main__":
    unittest.main()
