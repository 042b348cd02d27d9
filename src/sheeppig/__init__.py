"""SheepPig compiler front end: tokenizer, preprocessor and parser."""

__version__ = "0.1.0"
