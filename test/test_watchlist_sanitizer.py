import sys
import unittest
from pathlib import Path

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from domain.watchlist import sanitize_text, validate_name


class TestSanitizeText(unittest.TestCase):
    def test_trims_and_escapes(self) -> None:
        self.assertEqual(sanitize_text("  Heat  "), "Heat")
        self.assertEqual(sanitize_text("<b>"), "&lt;b&gt;")
        self.assertEqual(sanitize_text("Tom & Jerry"), "Tom &amp; Jerry")
        self.assertEqual(sanitize_text('Say "hi"'), "Say &quot;hi&quot;")
        self.assertEqual(sanitize_text("Schindler's List"), "Schindler&apos;s List")
        self.assertEqual(sanitize_text("AC/DC"), "AC&sol;DC")

    def test_ampersand_escaped_once(self) -> None:
        self.assertEqual(sanitize_text("<"), "&lt;")
        self.assertEqual(sanitize_text("&lt;"), "&lt;")
        self.assertEqual(sanitize_text("&copy;"), "&amp;copy;")

    def test_drops_non_ascii_non_alphabetic(self) -> None:
        self.assertEqual(sanitize_text("Amélie"), "Amélie")
        self.assertEqual(sanitize_text("Price €5 ✓"), "Price 5")
        self.assertEqual(sanitize_text("€ Heat"), "Heat")
        self.assertEqual(sanitize_text("★★★"), "")

    def test_truncates_without_splitting_entities(self) -> None:
        self.assertEqual(len(sanitize_text("a" * 500)), 200)
        out = sanitize_text("a" * 198 + "&b")
        self.assertEqual(out, "a" * 198)
        self.assertEqual(sanitize_text("a" * 195 + "&b"), "a" * 195 + "&amp;")

    def test_idempotent(self) -> None:
        samples = [
            "Inception",
            "  Tom & Jerry  ",
            "<script>alert('x')</script>",
            'He said "no" / she said yes',
            "a" * 198 + "&&&",
            "x" * 190 + "    " + "'" * 20,
            "Amélie € résumé",
            "&amp; &lt; &sol;",
        ]
        for s in samples:
            with self.subTest(s=s):
                once = sanitize_text(s)
                self.assertEqual(sanitize_text(once), once)

    def test_escaped_output_passes_name_pattern(self) -> None:
        for raw in ["Tom & Jerry", "Schindler's List", "AC/DC", 'The "Room"']:
            with self.subTest(raw=raw):
                validate_name(sanitize_text(raw))

    def test_non_string(self) -> None:
        self.assertEqual(sanitize_text(None), "")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
