"""Shared payloads for the filterflow test suite."""

from __future__ import annotations

import pytest


@pytest.fixture
def vtools_payload() -> dict:
    return {
        "success": True,
        "data": [
            {
                "name": "Nike sneakers",
                "search_text": "air max",
                "price_from": 10,
                "price_to": 55.0,
                "catalogs": [{"id": 1242, "data": "Sneakers"}],
                "brands": [{"id": 53, "data": "Nike"}, None, {"id": 14, "data": "Nike, Inc."}],
                "sizes": [{"id": 207, "data": "42"}],
                "statuses": [{"id": 6, "data": "New with tags"}],
                "colors": [],
                "materials": [{"id": 44, "data": "Leather"}],
                "countries": [{"id": 1, "data": "France"}],
                "enabled": True,
            },
            {"name": "   ", "enabled": True},
            {
                "name": "Vintage jackets",
                "search_text": None,
                "price_from": None,
                "brands": [{"id": 9, "data": None}],
                "enabled": False,
            },
        ],
    }


@pytest.fixture
def souk_payload() -> dict:
    return {
        "status": 200,
        "body": {
            "alerts": [
                {
                    "name": "Switch games",
                    "search_text": "zelda",
                    "price_from": "",
                    "price_to": 40,
                    "catalogs": [{"id": 3026, "title": "Video games"}],
                    "brands": [],
                    "sizes": None,
                    "status": [{"id": 2, "title": "Very good"}],
                    "colors": [{"id": 1, "title": "Black"}],
                    "video_game_platforms": [{"id": 1281, "title": "Nintendo Switch"}],
                    "is_deactivated": False,
                },
                "not an alert",
                {"name": "Paused alert", "is_deactivated": True},
            ]
        },
    }
