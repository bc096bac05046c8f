"""Environment configuration helpers."""

from lindenmayer.utilities.env.config import Configuration as Configuration
