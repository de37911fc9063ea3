import unittest
from unittest.mock import MagicMock, patch

from chatdrive import network
from chatdrive.db import InMemoryDbClient
from chatdrive.server import main, parse_args


class NetworkTests(unittest.TestCase):
    @patch("chatdrive.network.socket.socket")
    def test_get_local_ip_reports_interface_address(self, mock_socket):
        mock_socket.return_value.getsockname.return_value = ("192.168.1.20", 5555)
        self.assertEqual(network.get_local_ip(), "192.168.1.20")
        mock_socket.return_value.close.assert_called_once()

    @patch("chatdrive.network._hostname_ips", return_value=["127.0.1.1"])
    @patch("chatdrive.network.socket.socket")
    def test_get_local_ip_without_route(self, mock_socket, _):
        mock_socket.return_value.connect.side_effect = OSError("unreachable")
        self.assertIsNone(network.get_local_ip())

    @patch("chatdrive.network.socket.gethostname", return_value="lan-host")
    @patch("chatdrive.network.socket.getaddrinfo")
    @patch("chatdrive.network.socket.socket")
    def test_get_local_ip_falls_back_to_hostname(
        self, mock_socket, mock_getaddrinfo, _
    ):
        mock_socket.return_value.connect.side_effect = OSError("unreachable")
        mock_getaddrinfo.return_value = [
            (2, 2, 17, "", ("127.0.1.1", 0)),
            (2, 2, 17, "", ("192.168.0.42", 0)),
        ]
        self.assertEqual(network.get_local_ip(), "192.168.0.42")
        mock_getaddrinfo.assert_called_once_with("lan-host", None, network.socket.AF_INET)

    @patch("chatdrive.network.get_local_ip", return_value=None)
    def test_describe_addresses_offline(self, _):
        self.assertEqual(
            network.describe_addresses(5000), ["Local:           http://localhost:5000"]
        )

    @patch("chatdrive.network.get_local_ip", return_value="10.0.0.7")
    def test_describe_addresses_with_lan(self, _):
        lines = network.describe_addresses(8080)
        self.assertEqual(lines[1], "On Wifi Network: http://10.0.0.7:8080")


class ServerTests(unittest.TestCase):
    def test_defaults_bind_all_interfaces(self):
        args = parse_args([])
        self.assertEqual(args.host, "0.0.0.0")
        self.assertIsInstance(args.port, int)

    @patch("chatdrive.server.get_db_client", return_value=InMemoryDbClient())
    @patch("chatdrive.server.uvicorn.run")
    def test_main_runs_uvicorn(self, mock_run: MagicMock, _):
        self.assertEqual(main(["--port", "6000", "--log-level", "warning"]), 0)
        _, kwargs = mock_run.call_args
        self.assertEqual(kwargs["host"], "0.0.0.0")
        self.assertEqual(kwargs["port"], 6000)
        self.assertEqual(kwargs["log_level"], "warning")


if __name__ == "__main__":
    unittest.main()
