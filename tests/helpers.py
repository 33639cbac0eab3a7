from __future__ import annotations

from docstore import Document

TONY_ID = "5f731f1345b65d076150a7b6"
CATHY_ID = "5f7320135e9d29aebacd4f97"


def tony() -> Document:
    return Document(
        {
            "_id": TONY_ID,
            "name": "Tony",
            "age": 35,
            "emails": ["tony@example.com", "tstark@example.com"],
            "addresses": [
                {"street": "25 corp road", "city": "New York"},
                {"street": "1 malibu point", "city": "Malibu"},
            ],
        }
    )


def cathy() -> Document:
    return Document(
        {
            "_id": CATHY_ID,
            "name": "Cathy",
            "age": 22,
            "emails": ["cbear@hotmail.com"],
            "addresses": [{"street": "4646 Malibu Drive", "city": "Malibu"}],
        }
    )
