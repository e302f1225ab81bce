"""Static alias tables for client resolution.

Keys are lower-cased, trimmed phrases. A value of None is a deliberate
deny entry: the phrase is known but must never auto-resolve, so the
caller creates a stub for human review instead.
"""

from __future__ import annotations

from typing import Mapping

CLIENT_NAME_ALIASES: Mapping[str, str] = {
    "school of mentors": "school-of-mentors",
    "school of mentors - joel": "school-of-mentors",
    "joel / isaac": "joel-isaac",
    "joel/isaac": "joel-isaac",
    "joel kaplan": "joel-isaac",
    "bluecollarking": "bluecollarking",
    "blue collar king": "bluecollarking",
    "caseengine": "case-engine",
    "case engine": "case-engine",
    "ghl affiliate": "ghl-affiliate",
    "mechanic plug": "mechanic-plug",
    "chris coco": "mechanic-plug",
    "chris coco (mechanic plug)": "mechanic-plug",
    "platinum portrait artists": "platinum-portrait-artists",
    "platinumportraitartists": "platinum-portrait-artists",
    "cutrate mortgage": "cutrate-mortgage",
    "anotherzero": "anotherzero",
    "myskin": "myskin",
    "partner & scale": "partner-scale",
    "partner & scale - paul d": "partner-scale",
    "partner and scale": "partner-scale",
    "swati": "swati",
    "swati course ghl": "swati",
}

# Exact "Client (drop down)" values.
DROPDOWN_ALIASES: Mapping[str, str | None] = {
    "caseengine - cyle p": "case-engine",
    "mechanic plug - chris c": "mechanic-plug",
    "bck - matt m": "bluecollarking",
    "school of mentors - joel": "school-of-mentors",
    "som - joel": "school-of-mentors",
    "joel kaplan": "joel-isaac",
    "joel / isaac": "joel-isaac",
    "ghl affiliate": "ghl-affiliate",
    "platinumportraitartists": "platinum-portrait-artists",
    "platinum portrait artists": "platinum-portrait-artists",
    "partner & scale - paul d": "partner-scale",
    "agencyclients": "ghl-affiliate",
    "ems - mike r": None,
    "agency lab": None,
    "somerled": None,
    "bnb - damon niquet": None,
    "one-off": None,
    "clicktitan - brandon s": None,
    "homexperts usa - joe cho": None,
    "ben hoang": None,
}

# Person names and one-off phrases seen in historical task titles.
HISTORICAL_TITLE_ALIASES: Mapping[str, str | None] = {
    "matt m": "bluecollarking",
    "matt murray": "bluecollarking",
    "som coaching call": "school-of-mentors",
    "somerled": None,
    "ems": None,
    "agency lab": None,
    "agencyclients": None,
    "damon niquet": None,
    "barbara": None,
    "ben hoang": None,
    "joe cho": None,
    "al": None,
    "a2p registration and gmb fix": None,
    "styled survey": None,
}
