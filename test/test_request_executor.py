import asyncio
import unittest

import aiohttp

from tmdb_fakes import json_response, make_client
from movie_lookup.domain.results import ApiError, ErrorKind
from movie_lookup.ports.fetch_port import FetchResponse


class TestRequestExecutor(unittest.IsolatedAsyncioTestCase):
    async def test_appends_auth_and_language_after_caller_params(self) -> None:
        client, fetcher, _ = make_client(json_response({"results": []}))

        await client.get("search/movie", {"query": "fight club", "page": 2})

        url = fetcher.urls[0]
        self.assertTrue(url.startswith("https://api.themoviedb.org/3/search/movie?query=fight+club&page=2&"))
        self.assertTrue(url.endswith("&api_key=test-key&language=en-US"))

    async def test_without_params_auth_starts_the_query_string(self) -> None:
        client, fetcher, _ = make_client(json_response({"id": 550}))

        out = await client.get("movie/550")

        self.assertEqual(out, {"id": 550})
        self.assertEqual(fetcher.urls[0], "https://api.themoviedb.org/3/movie/550?api_key=test-key&language=en-US")

    async def test_low_remaining_header_rejects_without_parsing_body(self) -> None:
        bad_body = FetchResponse(status=200, headers={"X-RateLimit-Remaining": "2"}, body=b"not json")
        client, _, log = make_client(bad_body)

        out = await client.get("movie/upcoming")

        self.assertEqual(out, ApiError(ErrorKind.RATE_LIMITED))
        self.assertEqual(out.as_dict(), {"error": "Ratelimited. Try again in a few seconds."})
        self.assertEqual(log.infos, ["Ratelimited."])
        self.assertEqual(log.errors, [])

    async def test_enough_remaining_proceeds(self) -> None:
        client, _, log = make_client(json_response({"results": [{"id": 1}]}, remaining="10"))

        out = await client.get("movie/upcoming")

        self.assertEqual(out, {"results": [{"id": 1}]})
        self.assertEqual(log.infos, [])

    async def test_missing_or_non_numeric_header_never_rate_limits(self) -> None:
        for remaining in (None, "", "abc"):
            with self.subTest(remaining=remaining):
                client, _, _ = make_client(json_response({"id": 1}, remaining=remaining))
                self.assertEqual(await client.get("movie/1"), {"id": 1})

    async def test_only_plain_ascii_counts_rate_limit(self) -> None:
        for remaining in ("-inf", "nan", "-1", "٣", "2.5", "1e0", "0x1"):
            with self.subTest(remaining=remaining):
                client, _, log = make_client(json_response({"id": 1}, remaining=remaining))
                self.assertEqual(await client.get("movie/1"), {"id": 1})
                self.assertEqual(log.infos, [])

        client, _, _ = make_client(json_response({"id": 1}, remaining=" 3 "))
        self.assertEqual(await client.get("movie/1"), ApiError(ErrorKind.RATE_LIMITED))

    async def test_metadata_requests_ask_for_json(self) -> None:
        client, fetcher, _ = make_client(json_response({"id": 1}))

        await client.get("movie/1")

        self.assertEqual(fetcher.headers[0], {"accept": "application/json"})

    async def test_header_lookup_is_case_insensitive(self) -> None:
        resp = FetchResponse(status=200, headers={"x-ratelimit-remaining": "0"}, body=b"{}")
        client, _, _ = make_client(resp)

        self.assertEqual(await client.get("movie/1"), ApiError(ErrorKind.RATE_LIMITED))

    async def test_threshold_is_configurable(self) -> None:
        client, _, _ = make_client(json_response({"id": 1}, remaining="2"), rate_limit_min_remaining=2)
        self.assertEqual(await client.get("movie/1"), {"id": 1})

        client, _, _ = make_client(json_response({"id": 1}, remaining="9"), rate_limit_min_remaining=10)
        self.assertEqual(await client.get("movie/1"), ApiError(ErrorKind.RATE_LIMITED))

    async def test_failure_envelope_is_invalid(self) -> None:
        envelope = {"success": False, "status_code": 34, "status_message": "The resource you requested could not be found."}
        client, _, _ = make_client(json_response(envelope, status=404))

        out = await client.get("movie/0")

        self.assertEqual(out.as_dict(), {"error": "Unable to get data from API."})

    async def test_transport_errors_become_error_values(self) -> None:
        for exc in (
            aiohttp.ClientConnectionError("connection reset"),
            asyncio.TimeoutError(),
            OSError("network unreachable"),
        ):
            with self.subTest(exc=type(exc).__name__):
                client, _, log = make_client(exc)
                out = await client.get("movie/550")
                self.assertEqual(out, ApiError(ErrorKind.TRANSPORT_FAILURE))
                self.assertEqual(len(log.errors), 1)

    async def test_malformed_json_becomes_error_value(self) -> None:
        client, _, _ = make_client(FetchResponse(status=200, headers={}, body=b"<html>oops</html>"))

        self.assertEqual(await client.get("movie/550"), ApiError(ErrorKind.TRANSPORT_FAILURE))

    async def test_non_object_json_is_invalid(self) -> None:
        client, _, _ = make_client(json_response(None))

        self.assertEqual(await client.get("movie/550"), ApiError(ErrorKind.TRANSPORT_FAILURE))

    async def test_language_comes_from_config(self) -> None:
        client, fetcher, _ = make_client(json_response({"id": 1}), language="de-DE")

        await client.get("movie/1")

        self.assertEqual(fetcher.params(0)["language"], "de-DE")


if __name__ == "__main__":
    unittest.main()
