from django.test import SimpleTestCase

from core.sanitizers import (
    MAX_TITLE_LENGTH,
    sanitize_description,
    sanitize_message,
    sanitize_title,
)


class SanitizerTestCase(SimpleTestCase):
    def test_title_is_single_line(self):
        self.assertEqual(sanitize_title("  R&D\n launch   plan  "), "R&D launch plan")

    def test_title_is_capped(self):
        self.assertEqual(len(sanitize_title("x" * 400)), MAX_TITLE_LENGTH)

    def test_description_keeps_safe_markup(self):
        cleaned = sanitize_description('<p>Hi <script>alert(1)</script><a href="/x" onclick="y">link</a></p>')

        self.assertNotIn("<script", cleaned)
        self.assertNotIn("onclick", cleaned)
        self.assertIn('<a href="/x">link</a>', cleaned)

    def test_message_drops_control_characters(self):
        self.assertEqual(sanitize_message("hi\x00 there\n@bob@example.com"), "hi there\n@bob@example.com")

    def test_none_becomes_empty(self):
        self.assertEqual(sanitize_message(None), "")
