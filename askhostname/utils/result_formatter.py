"""
Text rendering of query results for the console.

Table mode prints one row per host; verbose mode prints every NetBIOS answer
and the domain name.
"""

from typing import Union

from ..core.data_models import IPAddress, NetBIOSName, QueryResult

PADDING_IP4 = 16
PADDING_IP6 = 36
PADDING_HOSTNAME = 16
PADDING_DOMAIN_NAME = 20


def _format_row(a, b, c, is_ipv6: bool) -> str:
    ip_width = PADDING_IP6 if is_ipv6 else PADDING_IP4
    return f"{str(a):<{ip_width}} {str(b):<{PADDING_HOSTNAME}} {str(c):<{PADDING_DOMAIN_NAME}}".rstrip()


def table_header(address: Union[IPAddress, None] = None) -> str:
    is_ipv6 = address is not None and address.version == 6
    return _format_row("IP address", "Hostname", "Domain name", is_ipv6) + "\n"


def table_row(result: QueryResult) -> str:
    if result.is_empty():
        return ""
    return _format_row(
        result.ip_address,
        result.hostname or "-",
        result.domain_name or "-",
        result.ip_address.version == 6,
    ) + "\n"


def verbose_entry(result: QueryResult) -> str:
    """
    Multi-line description of a result.

    Example::

        192.168.1.20
        WORKSTATION Service: 0 (Workstation/Service)
        WORKGROUP (Group) Service: 0 (Workstation/Service)
        MAC address: 00:11:22:33:44:55
        Domain name: workstation.local
    """
    if result.is_empty():
        return ""

    lines = ["", str(result.ip_address)]
    for answer in result.host_names:
        line = answer.describe()
        if isinstance(answer, NetBIOSName) and answer.service_description:
            line += f" ({answer.service_description})"
        lines.append(line)
    if result.domain_name:
        lines.append(f"Domain name: {result.domain_name}")
    lines.append("")
    return "\n".join(lines) + "\n"


class ResultFormatter:
    """Picks table or verbose rendering for the output sink."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def header(self, address: Union[IPAddress, None] = None) -> str:
        if self.verbose:
            return ""
        return table_header(address)

    def __call__(self, result: QueryResult) -> str:
        if self.verbose:
            return verbose_entry(result)
        return table_row(result)
