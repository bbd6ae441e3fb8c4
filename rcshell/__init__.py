"""Parts of the rc command shell: tokenizer, wildcard matching, exit statuses, signals, formatting, parse trees, command lookup, child tracking and a history tool."""

__version__ = "1.7.4"