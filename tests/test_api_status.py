"""Tests for residency status API endpoints."""

from httpx import AsyncClient

AUSTRALIA_TRIP = [
    {
        "id": "1",
        "departureCountry": "US",
        "arrivalCountry": "AU",
        "departureDate": "2024-01-01",
        "arrivalDate": "2024-01-10",
    },
]


async def _save(client: AsyncClient, user_id: str, entries: list[dict]) -> None:
    response = await client.put(f"/entries/{user_id}", json={"entries": entries})
    assert response.status_code == 200


class TestCurrentStatus:
    async def test_no_travel(self, client: AsyncClient) -> None:
        """Every country is safe with zero days, in rule order."""
        response = await client.get("/status/new-user")

        assert response.status_code == 200
        data = response.json()
        assert data["view"] == "current"
        assert data["reference_date"] == "2024-06-30"
        assert data["year"] is None
        codes = [stay["code"] for stay in data["stays"]]
        assert codes == ["AU", "NZ", "US", "KR", "HK", "IT", "AE", "MC", "GB", "JP"]
        assert all(stay["days"] == 0 for stay in data["stays"])
        assert all(stay["status"] == "safe" for stay in data["stays"])

    async def test_open_stay_counts_to_today(self, client: AsyncClient) -> None:
        """Jan 10 to Jun 30 inclusive is 173 days, inside the warning band."""
        await _save(client, "user-123", AUSTRALIA_TRIP)

        response = await client.get("/status/user-123")

        top = response.json()["stays"][0]
        assert top["code"] == "AU"
        assert top["days"] == 173
        assert top["status"] == "warning"
        assert top["status_label"] == "Approaching Limit"
        assert top["days_remaining"] == 10

    async def test_as_of_year_end(self, client: AsyncClient) -> None:
        await _save(client, "user-123", AUSTRALIA_TRIP)

        response = await client.get("/status/user-123", params={"as_of": "2024-12-31"})

        data = response.json()
        assert data["reference_date"] == "2024-12-31"
        top = data["stays"][0]
        assert top["code"] == "AU"
        assert top["days"] == 357
        assert top["status"] == "danger"
        assert top["status_label"] == "Over Threshold"
        assert top["days_remaining"] == 0

    async def test_exclude_zero(self, client: AsyncClient) -> None:
        await _save(client, "user-123", AUSTRALIA_TRIP)

        response = await client.get("/status/user-123", params={"include_zero": "false"})

        stays = response.json()["stays"]
        assert [stay["code"] for stay in stays] == ["AU"]

    async def test_custom_threshold_applies(self, client: AsyncClient) -> None:
        await _save(client, "user-123", AUSTRALIA_TRIP)
        await client.patch("/rules/user-123/AU", json={"threshold": 100})

        response = await client.get("/status/user-123")

        top = response.json()["stays"][0]
        assert top["threshold"] == 100
        assert top["status"] == "danger"

    async def test_custom_country_included(self, client: AsyncClient) -> None:
        await _save(
            client,
            "user-123",
            [
                {
                    "id": "1",
                    "departureCountry": "US",
                    "arrivalCountry": "FR",
                    "departureDate": "2024-06-01",
                    "arrivalDate": "2024-06-01",
                }
            ],
        )
        await client.post("/rules/user-123", json={"code": "FR", "name": "France"})

        response = await client.get("/status/user-123")

        top = response.json()["stays"][0]
        assert top["code"] == "FR"
        assert top["country"] == "France"
        assert top["days"] == 30

    async def test_as_of_before_earliest_reference(self, client: AsyncClient) -> None:
        response = await client.get("/status/user-123", params={"as_of": "0001-06-01"})

        assert response.status_code == 400
        assert "1900-01-01" in response.json()["detail"]

    async def test_as_of_earliest_reference(self, client: AsyncClient) -> None:
        """Rolling rules reach back into 1899 without error."""
        response = await client.get("/status/user-123", params={"as_of": "1900-01-01"})

        assert response.status_code == 200
        assert response.json()["reference_date"] == "1900-01-01"


class TestHistoricalStatus:
    async def test_open_stay_counts_to_year_end(self, client: AsyncClient) -> None:
        await _save(client, "user-123", AUSTRALIA_TRIP)

        response = await client.get("/status/user-123", params={"year": 2024})

        data = response.json()
        assert data["view"] == "historical"
        assert data["year"] == 2024
        assert data["reference_date"] == "2024-12-31"
        assert data["stays"][0]["days"] == 357

    async def test_year_before_travel(self, client: AsyncClient) -> None:
        await _save(client, "user-123", AUSTRALIA_TRIP)

        response = await client.get("/status/user-123", params={"year": 2023})

        assert all(stay["days"] == 0 for stay in response.json()["stays"])

    async def test_year_and_as_of_conflict(self, client: AsyncClient) -> None:
        response = await client.get(
            "/status/user-123", params={"year": 2024, "as_of": "2024-06-01"}
        )

        assert response.status_code == 400


class TestYears:
    async def test_no_entries_gives_current_year(self, client: AsyncClient) -> None:
        response = await client.get("/status/new-user/years")

        assert response.status_code == 200
        assert response.json()["years"] == [2024]

    async def test_years_from_entries(self, client: AsyncClient) -> None:
        await _save(
            client,
            "user-123",
            [
                {
                    "id": "1",
                    "departureCountry": "US",
                    "arrivalCountry": "AU",
                    "departureDate": "2022-12-31",
                    "arrivalDate": "2023-01-01",
                },
                {
                    "id": "2",
                    "departureCountry": "AU",
                    "arrivalCountry": "US",
                    "departureDate": "2024-02-01",
                    "arrivalDate": "2024-02-01",
                },
            ],
        )

        response = await client.get("/status/user-123/years")

        assert response.json()["years"] == [2024, 2023, 2022]
