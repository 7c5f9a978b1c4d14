"""Tests for the language catalogue."""

from __future__ import annotations

import pytest

from cqtool.languages import LANGUAGES, detect_language, get_language, language_for_path


class TestCatalogue:
    def test_ids_unique(self) -> None:
        ids = [lang.id for lang in LANGUAGES]
        assert len(ids) == len(set(ids))

    def test_get_language(self) -> None:
        lang = get_language("CPP")
        assert lang is not None
        assert lang.name == "C++"

    def test_unknown(self) -> None:
        assert get_language("brainfuck") is None


class TestLanguageForPath:
    @pytest.mark.parametrize(
        ("path", "language_id"),
        [
            ("main.py", "python"),
            ("src/app.js", "javascript"),
            ("index.ts", "typescript"),
            ("Main.java", "java"),
            ("lib.rs", "rust"),
            ("query.SQL", "sql"),
            ("view.m", "objc"),
            ("Dockerfile", "dockerfile"),
        ],
    )
    def test_known(self, path: str, language_id: str) -> None:
        lang = language_for_path(path)
        assert lang is not None
        assert lang.id == language_id

    def test_unknown_extension(self) -> None:
        assert language_for_path("notes.xyz") is None

    def test_no_extension(self) -> None:
        assert language_for_path("Makefile") is None


class TestDetectLanguage:
    @pytest.mark.parametrize(
        ("code", "language_id"),
        [
            ("def main():\n    print('hi')\n\nif __name__ == '__main__':\n    main()\n", "python"),
            (
                "public class Main {\n    public static void main(String[] args) {\n"
                "        System.out.println(\"hi\");\n    }\n}\n",
                "java",
            ),
            (
                "#include <iostream>\nusing namespace std;\nint main() {\n"
                "    cout << \"hi\" << endl;\n    return 0;\n}\n",
                "cpp",
            ),
            (
                "#include <stdio.h>\nint main(void) {\n    printf(\"%d\\n\", 42);\n    return 0;\n}\n",
                "c",
            ),
            (
                "const add = (a, b) => {\n  return a + b;\n};\nconsole.log(add(1, 2));\nmodule.exports = add;\n",
                "javascript",
            ),
            (
                "interface User {\n  name: string;\n  age: number;\n}\n"
                "type Id = string;\nexport function greet(user: User): string {\n  return user.name;\n}\n",
                "typescript",
            ),
        ],
    )
    def test_detects(self, code: str, language_id: str) -> None:
        detection = detect_language(code)
        assert detection.language is not None
        assert detection.language.id == language_id
        assert 0 < detection.confidence <= 100
        assert detection.reasons

    def test_alternatives_ranked_below_top(self) -> None:
        detection = detect_language("#include <iostream>\nint main() {\n    std::cout << 1;\n}\n")
        assert detection.language is not None
        assert detection.language.id == "cpp"
        assert all(lang.id != "cpp" for lang, _ in detection.alternatives)
        assert len(detection.alternatives) <= 3

    @pytest.mark.parametrize("code", ["", "   \n", "+-*/ 12345 %%%"])
    def test_nothing_detected(self, code: str) -> None:
        detection = detect_language(code)
        assert detection.language is None
        assert detection.confidence == 0
