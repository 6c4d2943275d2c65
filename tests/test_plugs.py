"""Tests for the baseline parameter and content-type fetchers."""

from restcontroller import ContentTypeFetcher, ParamsFetcher


class TestParamsFetcher:
    """Test parameter merging."""

    def test_merges_all_sources(self, make_conn):
        conn = make_conn(query_params={"page": "2"}, body_params={"name": "José"})
        conn.private.named_params = {"id": "7"}

        conn = ParamsFetcher().call(conn, {})

        assert conn.params == {"page": "2", "name": "José", "id": "7"}

    def test_route_params_win(self, make_conn):
        conn = make_conn(query_params={"id": "query"}, body_params={"id": "body"})
        conn.private.named_params = {"id": "route"}

        conn = ParamsFetcher().call(conn, {})

        assert conn.params["id"] == "route"

    def test_body_wins_over_query(self, make_conn):
        conn = make_conn(query_params={"name": "query"}, body_params={"name": "body"})

        conn = ParamsFetcher().call(conn, {})

        assert conn.params["name"] == "body"

    def test_private_namespace_untouched(self, make_conn):
        conn = make_conn(query_params={"action": "delete", "controller": "Evil"})
        conn.private.action = "show"

        conn = ParamsFetcher().call(conn, {})

        assert conn.private.action == "show"
        assert conn.private.controller is None
        assert conn.params["action"] == "delete"


class TestContentTypeFetcher:
    """Test the response content type guess."""

    def test_format_param(self, make_conn):
        conn = make_conn(params={"format": "json"}, headers={"Accept": "text/html"})

        conn = ContentTypeFetcher().call(conn, {})

        assert conn.resp_content_type == "application/json"

    def test_first_known_accept_type(self, make_conn):
        conn = make_conn(headers={"Accept": "application/x-unknown-thing, text/plain;q=0.5, application/json"})

        conn = ContentTypeFetcher().call(conn, {})

        assert conn.resp_content_type == "application/json"

    def test_quality_order(self, make_conn):
        conn = make_conn(headers={"Accept": "text/html;q=0.4, text/plain;q=0.9"})

        conn = ContentTypeFetcher().call(conn, {})

        assert conn.resp_content_type == "text/plain"

    def test_wildcards_leave_type_unset(self, make_conn):
        conn = make_conn(headers={"Accept": "*/*"})

        conn = ContentTypeFetcher().call(conn, {})

        assert conn.resp_content_type is None

    def test_no_accept_header(self, make_conn):
        conn = ContentTypeFetcher().call(make_conn(), {})

        assert conn.resp_content_type is None

    def test_existing_type_is_kept(self, make_conn):
        conn = make_conn(headers={"Accept": "application/json"}, resp_content_type="text/csv")

        conn = ContentTypeFetcher().call(conn, {})

        assert conn.resp_content_type == "text/csv"

    def test_unknown_format_falls_back_to_accept(self, make_conn):
        conn = make_conn(params={"format": "nosuchformat"}, headers={"Accept": "text/plain"})

        conn = ContentTypeFetcher().call(conn, {})

        assert conn.resp_content_type == "text/plain"
