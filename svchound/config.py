import argparse
import os
import sys
from typing import Any, Dict

from rich_argparse import RichHelpFormatter

try:
    import tomllib
except ImportError:
    # Python < 3.11
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None

CONFIG_PATHS = [
    "svchound.toml",
    "config/svchound.toml",
    os.path.expanduser("~/.config/svchound/svchound.toml"),
]


class TableRichHelpFormatter(RichHelpFormatter):
    """
    Help formatter with SvcHound's color scheme and uppercase group names.
    """

    styles = {
        **RichHelpFormatter.styles,
        "argparse.groups": "bold cyan",
        "argparse.args": "green",
        "argparse.metavar": "yellow",
        "argparse.help": "white",
    }

    group_name_formatter = str.upper


class OnceOnly(argparse.Action):
    """
    Custom argparse Action to prevent arguments from being specified multiple times.

    Only command-line occurrences count, so a value loaded from svchound.toml
    is a default that one -t/-u/... on the command line replaces.
    """

    SEEN_ATTR = "_once_only_seen"

    def __call__(self, parser, namespace, values, option_string=None):
        seen = getattr(namespace, self.SEEN_ATTR, None)
        if seen is None:
            seen = set()
            setattr(namespace, self.SEEN_ATTR, seen)
        if self.dest in seen:
            raise argparse.ArgumentError(self, f"Argument {option_string} can only be specified once.")
        seen.add(self.dest)
        setattr(namespace, self.dest, values)


def load_config() -> Dict[str, Any]:
    """
    Load configuration from TOML files.

    Priority:
    1. ./svchound.toml
    2. ./config/svchound.toml
    3. ~/.config/svchound/svchound.toml
    """
    if not tomllib:
        return {}

    config_data = {}
    loaded_path = None

    for path in CONFIG_PATHS:
        if os.path.exists(path):
            try:
                with open(path, "rb") as f:
                    config_data = tomllib.load(f)
                loaded_path = path
                break
            except Exception as e:
                print(f"[!] Error loading config file {path}: {e}")

    if not config_data:
        return {}

    if loaded_path == "svchound.toml" and "password" in config_data.get("authentication", {}):
        print("[!] WARNING: Using svchound.toml with a password from the current directory")
        print("[!] Consider moving it to ~/.config/svchound/svchound.toml")

    # Flatten and map config to argparse destinations
    defaults = {}

    auth = config_data.get("authentication", {})
    for key in ("username", "password", "domain", "hashes", "kerberos", "aes_key"):
        if key in auth:
            defaults[key] = auth[key]

    target = config_data.get("target", {})
    for key in ("target", "targets_file", "timeout", "dc_ip"):
        if key in target:
            defaults[key] = target[key]
    if isinstance(defaults.get("target"), list):
        defaults["target"] = ",".join(defaults["target"])

    filters = config_data.get("filters", {})
    if "task_exclusions" in filters:
        defaults["config_exclusions"] = list(filters["task_exclusions"])
    if "no_default_exclusions" in filters:
        defaults["no_default_exclusions"] = filters["no_default_exclusions"]

    output = config_data.get("output", {})
    for key in ("output", "log_file", "status_json", "verbose", "debug"):
        if key in output:
            defaults[key] = output[key]

    return defaults


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="svchound",
        description="Inventory service accounts used by Windows services and scheduled tasks.",
        formatter_class=TableRichHelpFormatter,
    )

    auth = ap.add_argument_group("Authentication options")
    auth.add_argument("-u", "--username", action=OnceOnly, help="Username for remote hosts (default: current session)")
    auth.add_argument("-p", "--password", action=OnceOnly, help="Password (omit with -k if using Kerberos/ccache)")
    auth.add_argument("-d", "--domain", action=OnceOnly, help="Domain of the account")
    auth.add_argument(
        "--hashes", help="NTLM hashes in LM:NT format (or NT-only 32-hex) to use instead of password"
    )
    auth.add_argument("-k", "--kerberos", action="store_true", help="Use Kerberos authentication (supports ccache)")
    auth.add_argument(
        "--aes-key",
        dest="aes_key",
        help="AES key for Kerberos authentication (AES-128: 32 hex chars, AES-256: 64 hex chars). Implies -k.",
    )
    auth.add_argument("--dc-ip", help="Domain controller / KDC address for Kerberos")

    target = ap.add_argument_group("Target options")
    target.add_argument(
        "-t", "--target", action=OnceOnly,
        help="Host(s) to inspect - single host or comma-separated list (default: this computer)",
    )
    target.add_argument("--targets-file", help="File with hosts, one per line")
    target.add_argument(
        "--timeout",
        type=int,
        default=30,
        help="Connection timeout in seconds for reachability and remote queries (default: 30)",
    )

    filters = ap.add_argument_group("Filter options")
    filters.add_argument(
        "--exclude-task",
        dest="exclude_task",
        action="append",
        default=[],
        metavar="TERM",
        help="Drop scheduled tasks whose name contains TERM (case-sensitive, repeatable)",
    )
    filters.add_argument(
        "--no-default-exclusions",
        action="store_true",
        help="Do not apply the built-in list of vendor task exclusions",
    )

    out = ap.add_argument_group("Output options")
    out.add_argument(
        "-o", "--output",
        help="CSV output path (default: ServiceAccounts_<timestamp>.csv in the current directory)",
    )
    out.add_argument("--log-file", help="Save a plain-text transcript of the console output to this file")
    out.add_argument("--status-json", help="Write per-host status (reachability, counts, warnings) as JSON")
    out.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    out.add_argument("--debug", action="store_true", help="Enable debug output (print full stack traces)")

    ap.set_defaults(config_exclusions=[])
    defaults = load_config()
    if defaults:
        ap.set_defaults(**defaults)
    return ap


def validate_args(args):
    if args.targets_file and not os.path.isfile(args.targets_file):
        print(f"[!] ERROR: targets file not found: {args.targets_file}")
        sys.exit(1)

    if args.hashes and args.password:
        print("[!] --hashes and --password are mutually exclusive; using --hashes")
        args.password = None

    if args.timeout <= 0:
        print("[!] ERROR: --timeout must be a positive number of seconds")
        sys.exit(1)

    if args.aes_key:
        args.kerberos = True
