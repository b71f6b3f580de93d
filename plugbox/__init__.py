"""Chat-bot plugin building blocks: command parsing, storage, reply text and image rendering."""

__version__ = "0.1.0"

__all__ = [
    "diana",
    "dress",
    "driftbottle",
    "emojimix",
    "epidemic",
    "event",
    "font",
    "fortune",
    "funny",
    "genshin",
    "gifcmd",
    "github",
]