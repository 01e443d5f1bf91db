"""Wykrywanie formatu blobów na podstawie sygnatur."""

from .classifier import FormatClassifier, classify, default_classifier
from .signatures import MediaSignature, SignatureMatcher, load_default_signatures, load_signatures

__all__ = [
	"FormatClassifier",
	"MediaSignature",
	"SignatureMatcher",
	"classify",
	"default_classifier",
	"load_default_signatures",
	"load_signatures",
]
