"""Supported language catalogue, file-extension lookup and content detection."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Language:
    id: str
    name: str
    extension: str


# Order matters: for a shared extension the first entry wins
# (".py" -> python, ".js" -> javascript, ".m" -> objc).
LANGUAGES: tuple[Language, ...] = (
    Language("c", "C", ".c"),
    Language("cpp", "C++", ".cpp"),
    Language("rust", "Rust", ".rs"),
    Language("go", "Go", ".go"),
    Language("csharp", "C#", ".cs"),
    Language("javascript", "JavaScript", ".js"),
    Language("typescript", "TypeScript", ".ts"),
    Language("nodejs", "Node.js", ".js"),
    Language("php", "PHP", ".php"),
    Language("html", "HTML", ".html"),
    Language("css", "CSS", ".css"),
    Language("java", "Java", ".java"),
    Language("kotlin", "Kotlin", ".kt"),
    Language("scala", "Scala", ".scala"),
    Language("swift", "Swift", ".swift"),
    Language("objc", "Objective-C", ".m"),
    Language("python", "Python", ".py"),
    Language("python3", "Python 3", ".py"),
    Language("ruby", "Ruby", ".rb"),
    Language("perl", "Perl", ".pl"),
    Language("lua", "Lua", ".lua"),
    Language("bash", "Bash", ".sh"),
    Language("shell", "Shell Script", ".sh"),
    Language("powershell", "PowerShell", ".ps1"),
    Language("haskell", "Haskell", ".hs"),
    Language("fsharp", "F#", ".fs"),
    Language("clojure", "Clojure", ".clj"),
    Language("elixir", "Elixir", ".ex"),
    Language("erlang", "Erlang", ".erl"),
    Language("pythonml", "Python (Data Science)", ".py"),
    Language("pytorch", "PyTorch", ".py"),
    Language("tensorflow", "TensorFlow", ".py"),
    Language("r", "R", ".r"),
    Language("julia", "Julia", ".jl"),
    Language("matlab", "MATLAB", ".m"),
    Language("sql", "SQL", ".sql"),
    Language("plsql", "PL/SQL", ".sql"),
    Language("mongodb", "MongoDB Query", ".js"),
    Language("dart", "Dart (Flutter)", ".dart"),
    Language("flutter", "Flutter", ".dart"),
    Language("reactnative", "React Native", ".js"),
    Language("java-spring", "Java (Spring)", ".java"),
    Language("csharp-dotnet", "C# (.NET)", ".cs"),
    Language("python-django", "Python (Django)", ".py"),
    Language("python-flask", "Python (Flask)", ".py"),
    Language("python-fastapi", "Python (FastAPI)", ".py"),
    Language("javascript-react", "JavaScript (React)", ".js"),
    Language("javascript-vue", "JavaScript (Vue.js)", ".js"),
    Language("javascript-angular", "JavaScript (Angular)", ".js"),
    Language("typescript-react", "TypeScript (React)", ".tsx"),
    Language("typescript-angular", "TypeScript (Angular)", ".ts"),
    Language("php-laravel", "PHP (Laravel)", ".php"),
    Language("php-symfony", "PHP (Symfony)", ".php"),
    Language("ruby-rails", "Ruby (Rails)", ".rb"),
    Language("yaml", "YAML", ".yml"),
    Language("json", "JSON", ".json"),
    Language("dockerfile", "Dockerfile", ""),
    Language("terraform", "Terraform", ".tf"),
    Language("ansible", "Ansible", ".yml"),
    Language("kubernetes", "Kubernetes", ".yaml"),
    Language("solidity", "Solidity", ".sol"),
    Language("assembly", "Assembly", ".asm"),
    Language("verilog", "Verilog", ".v"),
    Language("vhdl", "VHDL", ".vhd"),
    Language("latex", "LaTeX", ".tex"),
    Language("markdown", "Markdown", ".md"),
    Language("cobol", "COBOL", ".cob"),
    Language("fortran", "Fortran", ".f90"),
    Language("pascal", "Pascal", ".pas"),
    Language("delphi", "Delphi", ".pas"),
    Language("vb", "Visual Basic", ".vb"),
    Language("groovy", "Groovy", ".groovy"),
    Language("scheme", "Scheme", ".scm"),
    Language("prolog", "Prolog", ".pl"),
)

_BY_ID = {lang.id: lang for lang in LANGUAGES}
_BY_EXTENSION: dict[str, Language] = {}
for _lang in LANGUAGES:
    if _lang.extension:
        _BY_EXTENSION.setdefault(_lang.extension, _lang)
_BY_FILENAME = {"dockerfile": _BY_ID["dockerfile"]}


def get_language(language_id: str) -> Language | None:
    return _BY_ID.get(language_id.strip().lower())


def language_for_path(path: str | Path) -> Language | None:
    """Guess the language of a source file from its name, or None."""
    path = Path(path)
    if path.name.lower() in _BY_FILENAME:
        return _BY_FILENAME[path.name.lower()]
    return _BY_EXTENSION.get(path.suffix.lower())


# ----------------------------------------------------------------------
# Detection from code content
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class _Pattern:
    keywords: tuple[str, ...]
    imports: tuple[str, ...]
    syntax: tuple[str, ...]
    specific: tuple[str, ...]


# Score per occurrence: keyword 2, import 3; per matching regex: syntax 4, specific 5.
_PATTERNS: dict[str, _Pattern] = {
    "javascript": _Pattern(
        keywords=("function", "var", "let", "const", "async", "await", "undefined", "typeof", "instanceof",
                  "prototype", "return", "new", "this"),
        imports=("require", "module.exports", "export default", "export const", "export function"),
        syntax=(r"function\s+\w+\s*\(", r"=>\s*\{", r"console\.log\(", r"\.addEventListener\(",
                r"\bdocument\.", r"\bwindow\.", r"\bPromise\b", r"\basync\b.*\bawait\b"),
        specific=(r"\$\(", r"React\.", r"useState\(", r"process\.env", r"module\.exports",
                  r"require\(.+\)", r"export\s+(default|const|function|class)"),
    ),
    "typescript": _Pattern(
        keywords=("interface", "type", "enum", "namespace", "implements", "readonly", "declare", "unknown",
                  "never", "keyof", "const", "let", "function", "return"),
        imports=("import", "export", "from"),
        syntax=(r":\s*(string|number|boolean|void|any|unknown|never|symbol|bigint)\b", r"interface\s+\w+",
                r"type\s+\w+\s*=", r"function\s+\w+\s*\([^)]*\)\s*:\s*\w+", r"readonly\s+\w+",
                r"abstract\s+class", r"declare\s+(module|global|function|const|let|var|class|interface|type)"),
        specific=(r"React\.FC", r"useState<\w+>", r"\bas\s+[A-Z]\w*", r"implements\s+\w+", r"enum\s+\w+",
                  r"namespace\s+\w+", r"import\s+type\s+\{.*\}"),
    ),
    "python": _Pattern(
        keywords=("def", "elif", "except", "lambda", "yield", "nonlocal", "pass", "raise", "None", "True",
                  "False", "self", "print", "return", "import", "from"),
        imports=("import", "from"),
        syntax=(r"def\s+\w+\s*\(", r"class\s+\w+\s*(\([\w., ]*\))?:", r"print\(.+\)", r'"""[\s\S]*?"""',
                r"\bself\b", r"(?m)^\s*#(?!include|define)"),
        specific=(r"if __name__ == ['\"]__main__['\"]:", r"(?m)^\s*@\w+", r"except\s+\w+\s+as\s+\w+",
                  r"with\s+open\(.+\)\s+as\s+\w+:"),
    ),
    "java": _Pattern(
        keywords=("public", "private", "protected", "class", "extends", "implements", "package", "static",
                  "final", "void", "throws", "synchronized", "new", "return"),
        imports=("import", "package"),
        syntax=(r"public\s+class\s+\w+", r"static\s+void\s+main\s*\(", r"System\.out\.println\(",
                r"extends\s+\w+", r"implements\s+\w+"),
        specific=(r"package\s+\w+(\.\w+)*;", r"import\s+\w+(\.\w+)*(\.\*)?;", r"throws\s+\w+", r"@Override"),
    ),
    "c": _Pattern(
        keywords=("int", "char", "void", "struct", "typedef", "unsigned", "sizeof", "NULL", "printf",
                  "scanf", "main", "return"),
        imports=("#include",),
        syntax=(r"#include\s+<\w+\.h>", r"int\s+main\s*\(", r"printf\(.+\)", r"->"),
        specific=(r"#define\s+\w+", r"typedef\s+struct", r"scanf\(.+\)", r"malloc\("),
    ),
    "cpp": _Pattern(
        keywords=("int", "void", "class", "public", "private", "namespace", "using", "std", "cout", "cin",
                  "endl", "template", "typename", "virtual", "nullptr", "main", "return"),
        imports=("#include", "using namespace"),
        syntax=(r"#include\s+<\w+>", r"int\s+main\s*\(", r"std::\w+", r"->"),
        specific=(r"cin\s*>>", r"cout\s*<<", r"using\s+namespace\s+std", r"template\s*<.*>"),
    ),
}

_COMPILED = {
    lang_id: (
        [re.compile(rf"(?<!\w){re.escape(word)}(?!\w)", re.IGNORECASE) for word in pattern.keywords],
        [re.compile(rf"(?<!\w){re.escape(word)}(?!\w)", re.IGNORECASE) for word in pattern.imports],
        [re.compile(expr) for expr in pattern.syntax],
        [re.compile(expr) for expr in pattern.specific],
    )
    for lang_id, pattern in _PATTERNS.items()
}


@dataclass(frozen=True)
class LanguageDetection:
    """Best content-based guess. ``language`` is None when nothing matched."""

    language: Language | None
    confidence: int = 0  # 0-100
    alternatives: tuple[tuple[Language, int], ...] = ()
    reasons: tuple[str, ...] = ()


def _score(code: str, lang_id: str) -> tuple[int, list[str]]:
    keywords, imports, syntax, specific = _COMPILED[lang_id]
    score = 0
    reasons: list[str] = []
    for weight, label, regexes in ((2, "keyword", keywords), (3, "import", imports)):
        for regex in regexes:
            count = len(regex.findall(code))
            if count:
                score += count * weight
                reasons.append(f'"{regex.pattern}" {label} x{count}')
    for weight, label, regexes in ((4, "syntax", syntax), (5, "pattern", specific)):
        for regex in regexes:
            if regex.search(code):
                score += weight
                reasons.append(f"{label} {regex.pattern}")
    return score, reasons


def _confidence(score: int, ceiling: int) -> int:
    return min(100, round(score / ceiling * 100))


def detect_language(code: str) -> LanguageDetection:
    """Guess the language of ``code`` from keywords, imports and syntax patterns.

    Only the languages with detection rules can be returned. Confidence
    scales with score per line of code, with a boost for strong matches.
    """
    if not code.strip():
        return LanguageDetection(None, reasons=("no code provided",))

    scored = sorted(
        ((lang_id, *_score(code, lang_id)) for lang_id in _PATTERNS),
        key=lambda item: item[1],
        reverse=True,
    )
    scored = [item for item in scored if item[1] > 0]
    if not scored:
        return LanguageDetection(None, reasons=("no language patterns matched",))

    ceiling = max(20, len(code.splitlines()) * 10)
    top_id, top_score, top_reasons = scored[0]
    confidence = _confidence(top_score, ceiling)
    if top_score > 20:
        confidence = min(100, confidence + 20)
    if top_score > 50:
        confidence = min(100, confidence + 30)

    return LanguageDetection(
        language=_BY_ID[top_id],
        confidence=confidence,
        alternatives=tuple((_BY_ID[lang_id], _confidence(score, ceiling)) for lang_id, score, _ in scored[1:4]),
        reasons=tuple(top_reasons[:3]),
    )
