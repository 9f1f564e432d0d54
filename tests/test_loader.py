"""Unit tests for server and domain list loading."""

import json

import pytest

from dnsbench.exceptions import InputValidationError
from dnsbench.loader import load_domains, load_servers, validate_domains, validate_servers
from dnsbench.models import Server


class TestLoadServers:
    """Test load_servers."""

    def test_csv(self, tmp_path):
        path = tmp_path / "servers.csv"
        path.write_text("Name,Address\nCloudflare,1.1.1.1\n Google , 8.8.8.8 \n")

        servers = load_servers(path)

        assert servers == [Server("Cloudflare", "1.1.1.1"), Server("Google", "8.8.8.8")]

    def test_csv_headers_case_insensitive(self, tmp_path):
        path = tmp_path / "servers.csv"
        path.write_text("name,ADDRESS\nQuad9,9.9.9.9\n")

        assert load_servers(path) == [Server("Quad9", "9.9.9.9")]

    def test_csv_keeps_duplicates(self, tmp_path):
        path = tmp_path / "servers.csv"
        path.write_text("Name,Address\nA,1.1.1.1\nA,1.1.1.1\n")

        assert len(load_servers(path)) == 2

    def test_csv_missing_address_names_line(self, tmp_path):
        path = tmp_path / "servers.csv"
        path.write_text("Name,Address\nCloudflare,1.1.1.1\nBroken,\n")

        with pytest.raises(InputValidationError, match=":3:"):
            load_servers(path)

    def test_csv_missing_column(self, tmp_path):
        path = tmp_path / "servers.csv"
        path.write_text("Name,IP\nCloudflare,1.1.1.1\n")

        with pytest.raises(InputValidationError, match="Address"):
            load_servers(path)

    def test_csv_header_only_is_empty(self, tmp_path):
        path = tmp_path / "servers.csv"
        path.write_text("Name,Address\n")

        with pytest.raises(InputValidationError, match="no servers"):
            load_servers(path)

    def test_json_list(self, tmp_path):
        path = tmp_path / "servers.json"
        path.write_text(json.dumps([{"Name": "Google", "Address": "8.8.8.8"}]))

        assert load_servers(path) == [Server("Google", "8.8.8.8")]

    def test_json_servers_key(self, tmp_path):
        path = tmp_path / "servers.json"
        path.write_text(json.dumps({"servers": [{"name": "Google", "address": "8.8.8.8"}]}))

        assert load_servers(path) == [Server("Google", "8.8.8.8")]

    def test_json_entry_missing_name(self, tmp_path):
        path = tmp_path / "servers.json"
        path.write_text(json.dumps([{"address": "8.8.8.8"}]))

        with pytest.raises(InputValidationError, match="entry 1"):
            load_servers(path)

    def test_json_invalid(self, tmp_path):
        path = tmp_path / "servers.json"
        path.write_text("{not json")

        with pytest.raises(InputValidationError, match="invalid JSON"):
            load_servers(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputValidationError, match="not found"):
            load_servers(tmp_path / "nope.csv")


class TestLoadDomains:
    """Test load_domains."""

    def test_trims_skips_and_deduplicates(self, tmp_path):
        path = tmp_path / "domains.txt"
        path.write_text("# popular sites\nexample.com\n\n  Example.org  \nexample.com\nexample.org\n")

        assert load_domains(path) == ["example.com", "Example.org", "example.org"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "domains.txt"
        path.write_text("# nothing here\n\n")

        with pytest.raises(InputValidationError, match="no domains"):
            load_domains(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputValidationError, match="not found"):
            load_domains(tmp_path / "domains.txt")


class TestValidation:
    """Test programmatic validation."""

    def test_validate_servers_rejects_blank_field(self):
        with pytest.raises(InputValidationError, match="entry 2"):
            validate_servers([Server("A", "1.1.1.1"), Server("B", "  ")])

    def test_validate_servers_rejects_empty_list(self):
        with pytest.raises(InputValidationError):
            validate_servers([])

    def test_validate_domains_rejects_empty_list(self):
        with pytest.raises(InputValidationError):
            validate_domains(["", "   "])

    def test_validate_domains_preserves_order(self):
        assert validate_domains(["b.com", "a.com", "b.com"]) == ["b.com", "a.com"]


class TestUnreadableInput:
    """Test files that cannot be decoded or parsed."""

    def test_domains_file_not_utf8(self, tmp_path):
        path = tmp_path / "domains.txt"
        path.write_bytes(b"example.com\n\xff\xfe.com\n")

        with pytest.raises(InputValidationError, match="not valid UTF-8"):
            load_domains(path)

    def test_servers_csv_not_utf8(self, tmp_path):
        path = tmp_path / "servers.csv"
        path.write_bytes(b"Name,Address\n\xff\xfeBad,1.1.1.1\n")

        with pytest.raises(InputValidationError, match="cannot read CSV"):
            load_servers(path)

    def test_servers_csv_field_too_large(self, tmp_path):
        path = tmp_path / "servers.csv"
        path.write_text("Name,Address\n" + "x" * 200_000 + ",1.1.1.1\n")

        with pytest.raises(InputValidationError, match="cannot read CSV"):
            load_servers(path)

    def test_servers_json_not_utf8(self, tmp_path):
        path = tmp_path / "servers.json"
        path.write_bytes(b'[{"name": "\xff", "address": "1.1.1.1"}]')

        with pytest.raises(InputValidationError, match="not valid UTF-8"):
            load_servers(path)


class TestNameAndAddressChecks:
    """Test that domains parse as DNS names and addresses are IPs."""

    @pytest.mark.parametrize("domain", ["a..b.com", "x" * 64 + ".com", "a." * 130 + "com"])
    def test_validate_domains_rejects_unparseable_names(self, domain):
        with pytest.raises(InputValidationError, match="Invalid domain name"):
            validate_domains(["example.com", domain])

    def test_domains_file_with_empty_label(self, tmp_path):
        path = tmp_path / "domains.txt"
        path.write_text("example.com\na..b.com\n")

        with pytest.raises(InputValidationError, match="a..b.com"):
            load_domains(path)

    def test_validate_domains_accepts_trailing_dot(self):
        assert validate_domains(["example.com."]) == ["example.com."]

    def test_validate_servers_rejects_hostname(self):
        with pytest.raises(InputValidationError, match="not an IP address"):
            validate_servers([Server("Google", "dns.google")])

    def test_validate_servers_accepts_ipv6(self):
        assert validate_servers([Server("Cloudflare v6", "2606:4700:4700::1111")])[0].address == "2606:4700:4700::1111"

    def test_csv_hostname_address_names_file(self, tmp_path):
        path = tmp_path / "servers.csv"
        path.write_text("Name,Address\nGoogle,dns.google\n")

        with pytest.raises(InputValidationError, match="not an IP address"):
            load_servers(path)
