"""File-type classification and per-language highlighting rules."""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class HighlightingOptions:
    """Which lexical classes a language highlights, and with which tokens."""
    numbers: bool = False
    strings: bool = False
    characters: bool = False
    line_comment: Optional[str] = None
    block_comment: Optional[Tuple[str, str]] = None
    primary_keywords: FrozenSet[str] = field(default_factory=frozenset)
    secondary_keywords: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def comments(self) -> bool:
        return self.line_comment is not None

    @property
    def multiline_comments(self) -> bool:
        return self.block_comment is not None


@dataclass(frozen=True)
class FileType:
    name: str = "No filetype"
    options: HighlightingOptions = field(default_factory=HighlightingOptions)

    def __str__(self):
        return self.name


def _words(text: str) -> FrozenSet[str]:
    return frozenset(text.split())


_C_TYPES = _words("char int long unsigned float double size_t signed short wchar_t __int128_t bool")

_C = FileType("C", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="//", block_comment=("/*", "*/"),
    primary_keywords=_words(
        "auto break case const continue default do else enum extern for goto if "
        "register return sizeof static struct switch typedef union void volatile while "
        "#include #ifndef #ifdef #if #else #endif #define #undef"),
    secondary_keywords=_C_TYPES,
))

_CPP = FileType("C++", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="//", block_comment=("/*", "*/"),
    primary_keywords=_words(
        "alignas alignof and and_eq asm auto bitand bitor break case catch class "
        "compl concept const consteval constexpr constinit const_cast continue "
        "co_await co_return co_yield decltype default delete do dynamic_cast else "
        "enum explicit export extern false for friend goto if inline mutable "
        "namespace new noexcept not not_eq nullptr operator or or_eq private "
        "protected public register reinterpret_cast requires return sizeof static "
        "static_assert static_cast struct switch template this thread_local throw "
        "true try typedef typeid typename union using virtual void volatile while "
        "xor xor_eq #include #ifndef #ifdef #if #else #endif #define #undef #pragma"),
    secondary_keywords=_C_TYPES | _words("char8_t char16_t char32_t"),
))

_RUST = FileType("Rust", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="//", block_comment=("/*", "*/"),
    primary_keywords=_words(
        "as break const continue crate else enum extern false fn for if impl in "
        "let loop match mut pub ref return self Self static struct super trait "
        "true type unsafe use where while dyn box do final macro typeof unsized "
        "yield async await try"),
    secondary_keywords=_words(
        "bool char i8 i16 i32 i64 i128 isize u8 u16 u32 u64 u128 usize f32 f64 str String"),
))

_JAVASCRIPT = FileType("Javascript", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="//", block_comment=("/*", "*/"),
    primary_keywords=_words(
        "async await break case catch class const continue debugger default "
        "delete do else export extends finally for function if import in "
        "instanceof let new return super switch this throw try typeof var void "
        "while with yield"),
    secondary_keywords=_words("get set null undefined true false"),
))

_GO = FileType("Go", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="//", block_comment=("/*", "*/"),
    primary_keywords=_words(
        "break case chan const continue default defer else fallthrough for func "
        "go goto if import interface map package range return select struct "
        "switch type var nil true false iota"),
    secondary_keywords=_words(
        "bool byte complex64 complex128 error float32 float64 int int8 int16 "
        "int32 int64 rune string uint uint8 uint16 uint32 uint64 uintptr"),
))

_JAVA = FileType("Java", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="//", block_comment=("/*", "*/"),
    primary_keywords=_words(
        "abstract assert break case catch class const continue default do else "
        "enum extends final finally for goto if implements import instanceof "
        "interface native new package private protected public return static "
        "strictfp super switch synchronized this throw throws transient try "
        "volatile while true false null var record"),
    secondary_keywords=_words("boolean byte char double float int long short void String"),
))

_CSHARP = FileType("C#", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="//", block_comment=("/*", "*/"),
    primary_keywords=_words(
        "abstract as base break case catch checked class const continue default "
        "delegate do else enum event explicit extern false finally fixed for "
        "foreach goto if implicit in interface internal is lock namespace new "
        "null operator out override params private protected public readonly "
        "ref return sealed sizeof stackalloc static struct switch this throw "
        "true try typeof unchecked unsafe using virtual volatile while var async await"),
    secondary_keywords=_words(
        "bool byte char decimal double float int long object sbyte short string "
        "uint ulong ushort void"),
))

_PYTHON = FileType("Python", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="#",
    primary_keywords=_words(
        "and as assert async await break class continue def del elif else except "
        "finally for from global if import in is lambda nonlocal not or pass "
        "raise return try while with yield match case"),
    secondary_keywords=_words(
        "True False None self cls int float str bytes bool list dict set tuple object"),
))

_RUBY = FileType("Ruby", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="#", block_comment=("=begin", "=end"),
    primary_keywords=_words(
        "BEGIN END alias and begin break case class def defined? do else elsif "
        "end ensure for if in module next not or redo rescue retry return self "
        "super then undef unless until when while yield"),
    secondary_keywords=_words("true false nil puts require attr_accessor attr_reader"),
))

_BASH = FileType("Bash", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="#",
    primary_keywords=_words(
        "if then else elif fi case esac for select while until do done in "
        "function time coproc return exit break continue"),
    secondary_keywords=_words(
        "echo printf read local export declare readonly unset shift source eval exec test"),
))

_HASKELL = FileType("Haskell", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="--", block_comment=("{-", "-}"),
    primary_keywords=_words(
        "case class data default deriving do else foreign if import in infix "
        "infixl infixr instance let module newtype of then type where"),
    secondary_keywords=_words(
        "Int Integer Float Double Char String Bool Maybe Either IO Just Nothing "
        "Left Right True False Show Eq Ord"),
))

_JSON = FileType("JSON", HighlightingOptions(
    numbers=True, strings=True,
    secondary_keywords=_words("true false null"),
))

_R = FileType("R", HighlightingOptions(
    numbers=True, strings=True, characters=True,
    line_comment="#",
    primary_keywords=_words(
        "if else repeat while function for in next break TRUE FALSE NULL Inf NaN "
        "NA NA_integer_ NA_real_ NA_character_"),
    secondary_keywords=_words("library require return print c list vector"),
))

DEFAULT_FILE_TYPE = FileType()

# Case-sensitive: ".C" is C++ while ".c" is C
_BY_EXTENSION = {
    ".c": _C,
    ".cc": _CPP, ".cpp": _CPP, ".C": _CPP, ".h": _CPP, ".hh": _CPP, ".hpp": _CPP,
    ".rs": _RUST,
    ".js": _JAVASCRIPT, ".mjs": _JAVASCRIPT,
    ".go": _GO,
    ".java": _JAVA,
    ".cs": _CSHARP,
    ".py": _PYTHON,
    ".rb": _RUBY,
    ".sh": _BASH, ".bash": _BASH,
    ".hs": _HASKELL,
    ".json": _JSON,
    ".r": _R, ".R": _R,
}


def file_type_for(path: Optional[str]) -> FileType:
    """Classify a path by its extension; unknown or missing means no filetype."""
    if not path:
        return DEFAULT_FILE_TYPE
    _, ext = os.path.splitext(path)
    return _BY_EXTENSION.get(ext, DEFAULT_FILE_TYPE)
