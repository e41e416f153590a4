from libs.http_client.headers import is_valid_header_name, is_valid_header_value, sanitize_headers


class TestHeaderValidation:
    def test_valid_names(self):
        assert is_valid_header_name("Content-Type")
        assert is_valid_header_name("x-api-key")
        assert is_valid_header_name("X_Custom.Header~1")

    def test_invalid_names(self):
        assert not is_valid_header_name("")
        assert not is_valid_header_name("Bad Header")
        assert not is_valid_header_name("Bad:Header")
        assert not is_valid_header_name("Héader")

    def test_valid_values(self):
        assert is_valid_header_value("Bearer abc.def")
        assert is_valid_header_value("")
        assert is_valid_header_value("a\tb")

    def test_invalid_values(self):
        assert not is_valid_header_value("line\r\nInjected: yes")
        assert not is_valid_header_value("café")
        assert not is_valid_header_value("nul\x00")


class TestSanitizeHeaders:
    def test_drops_only_invalid_pairs(self):
        headers = {
            "Accept": "application/json",
            "Bad Name": "value",
            "X-Trace": "bad\nvalue",
            "Authorization": "Bearer token",
        }
        assert sanitize_headers(headers) == {
            "Accept": "application/json",
            "Authorization": "Bearer token",
        }

    def test_none_and_empty(self):
        assert sanitize_headers(None) == {}
        assert sanitize_headers({}) == {}

    def test_does_not_mutate_input(self):
        headers = {"Bad Name": "value"}
        sanitize_headers(headers)
        assert headers == {"Bad Name": "value"}
