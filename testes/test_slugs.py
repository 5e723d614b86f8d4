import unittest

from prismic_bundler.utils.slugs import slugify


class TestSlugify(unittest.TestCase):

    def test_lowercase_and_hyphens(self):
        self.assertEqual(slugify("Hello World"), "hello-world")

    def test_accents_are_transliterated(self):
        self.assertEqual(slugify("Crème brûlée à Paris"), "creme-brulee-a-paris")

    def test_runs_of_separators_collapse(self):
        self.assertEqual(slugify("  2023 -- Summer_Party!! "), "2023-summer-party")

    def test_non_latin_characters_are_dropped(self):
        self.assertEqual(slugify("News 日本"), "news")

    def test_empty(self):
        self.assertEqual(slugify(""), "")
        self.assertEqual(slugify(None), "")


if __name__ == '__main__':
    unittest.main()
