import unittest

from pokeball.commands.keymap import is_quit, map_line_to_command, parse_command, parse_dex_index, sanitize_trainer_name


class TrainerNameTests(unittest.TestCase):
    def test_name_is_lowercased(self):
        self.assertEqual(sanitize_trainer_name("Ash_1"), "ash_1")
        self.assertEqual(sanitize_trainer_name("  MISTY-2 \r"), "misty-2")

    def test_invalid_names_rejected(self):
        for text in ("ash ketchum", "", "   ", "a" * 17, "ash!", "élise"):
            self.assertIsNone(sanitize_trainer_name(text), text)

    def test_sixteen_characters_allowed(self):
        self.assertEqual(sanitize_trainer_name("b" * 16), "b" * 16)


class CommandTests(unittest.TestCase):
    def test_parse_command_folds_case(self):
        self.assertEqual(parse_command("  CaTcH \n"), "catch")

    def test_quit_tokens(self):
        for line in ("q", "QUIT", " exit ", "\x03", "abc\x03"):
            self.assertTrue(is_quit(line), repr(line))
        self.assertFalse(is_quit("quitter"))

    def test_command_tokens(self):
        self.assertEqual(map_line_to_command("catch"), "CATCH")
        self.assertEqual(map_line_to_command("Pokedex"), "DEX")
        self.assertEqual(map_line_to_command("dex"), "DEX")
        self.assertEqual(map_line_to_command("back"), "BACK")
        self.assertEqual(map_line_to_command("next"), "NEXT")
        self.assertEqual(map_line_to_command("run"), "NEXT")
        self.assertEqual(map_line_to_command("25"), "NUMBER")
        self.assertIsNone(map_line_to_command("dance"))
        self.assertIsNone(map_line_to_command(""))

    def test_dex_index_bounds(self):
        self.assertEqual(parse_dex_index("1", 151), 1)
        self.assertEqual(parse_dex_index("151", 151), 151)
        self.assertIsNone(parse_dex_index("0", 151))
        self.assertIsNone(parse_dex_index("152", 151))
        self.assertIsNone(parse_dex_index("-3", 151))

    def test_non_ascii_digits_are_not_numbers(self):
        for token in ("\u00b2", "\u0663", "\uff15"):
            self.assertIsNone(parse_dex_index(token, 151), repr(token))
            self.assertIsNone(map_line_to_command(token), repr(token))


if __name__ == "__main__":
    unittest.main()
