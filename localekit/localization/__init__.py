"""Locale loading, module generation and translation sync."""

from .generator import ModuleGenerator
from .loader import LocaleSet, MissingTranslation, load_locale_set
from .merge import KeyMerger, MergeReport
from .ordering import dump_document, sort_document
from .sync import SyncSummary, TranslationSync
from .translator import GoogleTranslator, Translator
from .typegen import infer_type, render_locale_interface

__all__ = [
    "GoogleTranslator",
    "KeyMerger",
    "LocaleSet",
    "MergeReport",
    "MissingTranslation",
    "ModuleGenerator",
    "SyncSummary",
    "TranslationSync",
    "Translator",
    "dump_document",
    "infer_type",
    "load_locale_set",
    "render_locale_interface",
    "sort_document",
]
