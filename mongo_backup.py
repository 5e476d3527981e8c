#!/usr/bin/env python3
"""
MongoDB backup to S3.

Dumps a MongoDB deployment with mongodump (preferring a secondary replica set
member), streams a compressed tarball of the dump to S3 and optionally copies
it into weekly/monthly/latest prefixes.
"""
from __future__ import annotations

import argparse
import configparser
import fnmatch
import logging
import re
import shlex
import signal
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, NoReturn, Optional, Sequence


TIMESTAMP_FORMAT = "%Y-%m-%d_%Hh%Mm"
ARCHIVE_TIMESTAMP_GLOB = "????-??-??_??h??m.tgz"
ARCHIVE_SUFFIX = ".tgz"
CONFIG_SECTION = "backup"
NOISY_LOGGERS = ("boto", "boto3", "botocore", "urllib3", "s3transfer")

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 27017
DEFAULT_REGION = "us-east-1"
DEFAULT_MONTHLY_DAY = "01"
DEFAULT_WEEKLY_DAY = "6"

DAILY_FOLDER = "daily"
WEEKLY_FOLDER = "weekly"
MONTHLY_FOLDER = "monthly"
LATEST_FOLDER = "latest"

WEEKLY_DAY_PATTERN = re.compile(r"^[0-7]$")
MONTHLY_DAY_PATTERN = re.compile(r"^(0|0[1-9]|[12][0-9]|3[01])$")

RS_CONFIG_SCRIPT = "printjson(rs.conf())"
RS_MEMBERS_SCRIPT = "rs.conf().members.forEach(function(x){ print(x.host) })"
RS_SECONDARY_SCRIPT = "rs.isMaster().secondary"

# Config file keys, including the variable names of the old shell config.
CONFIG_KEYS: Dict[str, str] = {
    "host": "host",
    "port": "port",
    "username": "username",
    "password": "password",
    "auth_db": "auth_db",
    "authdb": "auth_db",
    "backup_dir": "backup_dir",
    "region": "region",
    "bucket": "bucket",
    "prefix": "prefix",
    "s3_prefix": "prefix",
    "basename": "basename",
    "dump_basename": "basename",
    "rotate": "rotate",
    "monthly_day": "monthly_day",
    "do_monthly": "monthly_day",
    "weekly_day": "weekly_day",
    "do_weekly": "weekly_day",
    "latest": "latest",
    "do_latest": "latest",
    "dry_run": "dry_run",
    "prefer_secondary": "prefer_secondary",
    "prefer_slave": "prefer_secondary",
    "oplog": "oplog",
    "aws_profile": "aws_profile",
    "mongo_shell": "mongo_shell",
    "mongodump_path": "mongodump_path",
}


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""


class BackupError(Exception):
    """Raised when an external command used by the backup fails."""


class BackupInterrupted(BackupError):
    """Raised when the process receives a termination signal."""


@dataclass(frozen=True)
class BackupConfig:
    bucket: str
    backup_dir: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    username: Optional[str] = None
    password: Optional[str] = None
    auth_db: Optional[str] = None
    region: str = DEFAULT_REGION
    prefix: Optional[str] = None
    basename: Optional[str] = None
    rotate: bool = False
    monthly_day: int = 1
    weekly_day: int = 6
    latest: bool = True
    dry_run: bool = False
    prefer_secondary: bool = True
    oplog: bool = True
    aws_profile: Optional[str] = None
    mongo_shell: str = "mongo"
    mongodump_path: str = "mongodump"

    @property
    def db_host(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class S3Location:
    bucket: str
    key: str

    def __str__(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


class UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


class _UsageAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None) -> NoReturn:
        parser.print_help(sys.stderr)
        parser.exit(1)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = UsageArgumentParser(
        description="Dump a MongoDB deployment and upload the archive to S3.",
        add_help=False,
    )
    parser.add_argument(
        "-h",
        "--help",
        action=_UsageAction,
        help="Show this message and exit.",
    )
    parser.add_argument(
        "-f",
        "--config",
        type=Path,
        metavar="PATH",
        help="INI config file; command line options take precedence over it.",
    )
    parser.add_argument("-u", "--username", metavar="USER", help="MongoDB username.")
    parser.add_argument("-p", "--password", metavar="PWD", help="MongoDB password.")
    parser.add_argument(
        "-a",
        "--auth-db",
        dest="auth_db",
        metavar="DB",
        help="MongoDB authentication database.",
    )
    parser.add_argument("-H", "--host", help=f"MongoDB host (default: {DEFAULT_HOST}).")
    parser.add_argument("-P", "--port", help=f"MongoDB port (default: {DEFAULT_PORT}).")
    parser.add_argument(
        "-s",
        "--prefer-secondary",
        dest="prefer_secondary",
        action="store_const",
        const=True,
        help="Dump from the first secondary replica set member found.",
    )
    parser.add_argument(
        "-B",
        "--backup-dir",
        dest="backup_dir",
        type=Path,
        metavar="DIR",
        help="Directory holding the temporary dump (default: current directory).",
    )
    parser.add_argument("-b", "--bucket", metavar="BKT", help="S3 bucket name.")
    parser.add_argument(
        "-n",
        "--basename",
        metavar="NAME",
        help="Basename for backup files (NAME_YYYY-MM-DD_HHhMMm.tgz).",
    )
    parser.add_argument(
        "-d",
        "--prefix",
        metavar="DIR",
        help="S3 prefix; daily/weekly/monthly/latest are appended when rotating.",
    )
    parser.add_argument("-R", "--region", metavar="RGN", help=f"AWS region (default: {DEFAULT_REGION}).")
    parser.add_argument(
        "-r",
        "--rotate",
        action="store_const",
        const=True,
        help="Enable weekly/monthly/latest rotation. UTC decides the day of week and month.",
    )
    parser.add_argument(
        "-m",
        "--monthly-day",
        dest="monthly_day",
        metavar="INT",
        help=f"Day of month for monthly backups, 01 to 31, 0 disables (default: {DEFAULT_MONTHLY_DAY}).",
    )
    parser.add_argument(
        "-w",
        "--weekly-day",
        dest="weekly_day",
        metavar="INT",
        help=f"Day of week for weekly backups, 1 is Monday, 0 disables (default: {DEFAULT_WEEKLY_DAY}).",
    )
    parser.add_argument(
        "-l",
        "--no-latest",
        dest="latest",
        action="store_const",
        const=False,
        help="Do not copy the backup to the latest prefix.",
    )
    parser.add_argument(
        "-D",
        "--dry-run",
        dest="dry_run",
        action="store_const",
        const=True,
        help="Explain only; do not dump, upload, copy or delete. Passwords are masked in printed commands.",
    )
    parser.add_argument(
        "--no-oplog",
        dest="oplog",
        action="store_const",
        const=False,
        help="Do not pass --oplog to mongodump.",
    )
    parser.add_argument(
        "--aws-profile",
        help="Named AWS shared credentials profile to use.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity (default: INFO).",
    )
    return parser.parse_args(argv)


def read_config_file(config_path: Path) -> Dict[str, str]:
    """Read the [backup] section of an INI file into BackupConfig field names.

    Files without a section header are read as plain key=value lines.
    """
    if not config_path.is_file():
        raise ConfigurationError(f"config file '{config_path}' does not exist")
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise ConfigurationError(f"unable to access config file '{config_path}'") from error

    parser = configparser.ConfigParser(interpolation=None)
    try:
        try:
            parser.read_string(text, source=str(config_path))
        except configparser.MissingSectionHeaderError:
            parser.read_string(f"[{CONFIG_SECTION}]\n{text}", source=str(config_path))
    except configparser.Error as error:
        raise ConfigurationError(f"Config file {config_path} could not be parsed: {error}") from error

    if CONFIG_SECTION not in parser:
        raise ConfigurationError(
            f"Config file {config_path} is missing the [{CONFIG_SECTION}] section."
        )
    for section in parser.sections():
        if section != CONFIG_SECTION:
            raise ConfigurationError(f"Unexpected section [{section}] in {config_path}.")

    values: Dict[str, str] = {}
    for key, value in parser[CONFIG_SECTION].items():
        field_name = CONFIG_KEYS.get(key)
        if field_name is None:
            raise ConfigurationError(f"Unknown config key '{key}' in {config_path}.")
        if field_name in values:
            raise ConfigurationError(
                f"Config key '{key}' sets {field_name}, which is already set in {config_path}."
            )
        values[field_name] = _unquote(value.strip())
    return values


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _pick(args: argparse.Namespace, file_cfg: Dict[str, str], name: str) -> Any:
    value = getattr(args, name, None)
    if value is not None:
        return value
    return file_cfg.get(name)


def _pick_bool(
    args: argparse.Namespace, file_cfg: Dict[str, str], name: str, default: bool
) -> bool:
    value = getattr(args, name, None)
    if value is not None:
        return value
    if name in file_cfg:
        return parse_bool(file_cfg[name])
    return default


def _optional(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


def merge_config(
    args: argparse.Namespace, file_config: Optional[Dict[str, str]]
) -> BackupConfig:
    file_cfg = file_config or {}

    host = _pick(args, file_cfg, "host")
    if host is None:
        host = DEFAULT_HOST
    port_value = _pick(args, file_cfg, "port")
    bucket = _pick(args, file_cfg, "bucket") or ""
    weekly_value = _pick(args, file_cfg, "weekly_day")
    monthly_value = _pick(args, file_cfg, "monthly_day")
    backup_dir_value = _pick(args, file_cfg, "backup_dir")
    region = _pick(args, file_cfg, "region") or DEFAULT_REGION

    if not host:
        raise ConfigurationError("host is required")
    if not bucket:
        raise ConfigurationError("bucket is required")

    weekly_text = DEFAULT_WEEKLY_DAY if weekly_value is None else str(weekly_value)
    if not WEEKLY_DAY_PATTERN.match(weekly_text):
        raise ConfigurationError(f"invalid weekday: {weekly_text}")
    monthly_text = DEFAULT_MONTHLY_DAY if monthly_value is None else str(monthly_value)
    if not MONTHLY_DAY_PATTERN.match(monthly_text):
        raise ConfigurationError(f"invalid month day: {monthly_text}")

    port = DEFAULT_PORT if port_value in (None, "") else parse_int(str(port_value), "port")
    if not 0 < port < 65536:
        raise ConfigurationError(f"port must be between 1 and 65535, got {port}.")

    if backup_dir_value:
        backup_dir = Path(backup_dir_value).expanduser().resolve()
    else:
        backup_dir = Path.cwd()
    if not backup_dir.is_dir():
        raise ConfigurationError(f"{backup_dir} does not exist")

    return BackupConfig(
        bucket=bucket,
        backup_dir=backup_dir,
        host=host,
        port=port,
        username=_optional(_pick(args, file_cfg, "username")),
        password=_optional(_pick(args, file_cfg, "password")),
        auth_db=_optional(_pick(args, file_cfg, "auth_db")),
        region=region,
        prefix=_optional(_pick(args, file_cfg, "prefix")),
        basename=_optional(_pick(args, file_cfg, "basename")),
        rotate=_pick_bool(args, file_cfg, "rotate", False),
        monthly_day=int(monthly_text),
        weekly_day=int(weekly_text),
        latest=_pick_bool(args, file_cfg, "latest", True),
        dry_run=_pick_bool(args, file_cfg, "dry_run", False),
        prefer_secondary=_pick_bool(args, file_cfg, "prefer_secondary", True),
        oplog=_pick_bool(args, file_cfg, "oplog", True),
        aws_profile=_optional(_pick(args, file_cfg, "aws_profile")),
        mongo_shell=file_cfg.get("mongo_shell") or "mongo",
        mongodump_path=file_cfg.get("mongodump_path") or "mongodump",
    )


def parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ConfigurationError(f"Invalid boolean value: {value}")


def parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError as error:
        raise ConfigurationError(f"{name} must be an integer.") from error


def _quiet_external_loggers() -> None:
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(log_level: str) -> None:
    level = getattr(logging, log_level.upper(), None)
    if level is None:
        raise ValueError(f"Invalid log level: {log_level}")
    logging.basicConfig(level=level)
    _quiet_external_loggers()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_iso(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def make_backup_name(basename: Optional[str], moment: datetime) -> str:
    stamp = moment.strftime(TIMESTAMP_FORMAT)
    return f"{basename}_{stamp}" if basename else stamp


def archive_pattern(basename: Optional[str]) -> str:
    return f"{basename}_{ARCHIVE_TIMESTAMP_GLOB}" if basename else ARCHIVE_TIMESTAMP_GLOB


def days_in_month(month: int, year: int) -> int:
    """Number of days in ``month`` of ``year`` (Gregorian calendar)."""
    days = 30 + (month + month // 8) % 2
    if month == 2:
        days -= 2
        if year % 4 == 0 and (year % 100 != 0 or year % 400 == 0):
            days += 1
    return days


def is_weekly_due(weekly_day: int, today: datetime) -> bool:
    return weekly_day == today.isoweekday()


def is_monthly_due(monthly_day: int, today: datetime) -> bool:
    # A day that does not occur this month (e.g. 31 in April) falls on the last day.
    last_day = days_in_month(today.month, today.year)
    return today.day == monthly_day or (today.day == last_day and last_day < monthly_day)


def auth_options(config: BackupConfig) -> List[str]:
    if not config.username:
        return []
    options = [f"--username={config.username}", f"--password={config.password or ''}"]
    if config.auth_db:
        options.append(f"--authenticationDatabase={config.auth_db}")
    return options


def format_command(command: Sequence[str]) -> str:
    masked = ["--password=****" if part.startswith("--password=") else part for part in command]
    return shlex.join(masked)


def run_command(command: Sequence[str], *, description: str) -> str:
    """Run ``command`` and return its stripped stdout; raise BackupError on failure."""
    logging.debug("Running %s", format_command(command))
    try:
        result = subprocess.run(list(command), capture_output=True, text=True, check=False)
    except FileNotFoundError as error:
        raise BackupError(f"{description}: {command[0]} not found") from error
    if result.returncode != 0:
        details = result.stderr.strip()[:500] or f"exit code {result.returncode}"
        raise BackupError(f"{description}: {details}")
    return result.stdout.strip()


def mongo_eval(config: BackupConfig, host: str, script: str, *, description: str) -> str:
    command = [config.mongo_shell, "--quiet", "--host", host, "--eval", script]
    command.extend(auth_options(config))
    return run_command(command, description=description)


def find_secondary(config: BackupConfig, members: Iterable[str]) -> Optional[str]:
    for member in members:
        answer = mongo_eval(
            config, member, RS_SECONDARY_SCRIPT, description="failed to get secondary status"
        )
        if answer == "true":
            return member
    return None


def select_dump_host(config: BackupConfig) -> str:
    """Return the first secondary replica set member, or the configured host."""
    db_host = config.db_host
    secondary: Optional[str] = None

    rs_config = mongo_eval(
        config, db_host, RS_CONFIG_SCRIPT, description="failed to get replica set config"
    )
    if rs_config != "null":
        members = mongo_eval(
            config, db_host, RS_MEMBERS_SCRIPT, description="failed to get replica set members"
        ).split()
        if len(members) > 1:
            secondary = find_secondary(config, members)

    if secondary:
        logging.info("Found secondary at %s", secondary)
        return secondary
    logging.info("No secondaries found, using %s", db_host)
    return db_host


def build_dump_command(config: BackupConfig, db_host: str, dump_dir: Path) -> List[str]:
    command = [config.mongodump_path, f"--host={db_host}", f"--out={dump_dir}"]
    command.extend(auth_options(config))
    if config.oplog:
        command.append("--oplog")
    return command


def dump_database(config: BackupConfig, db_host: str, dump_dir: Path) -> None:
    command = build_dump_command(config, db_host, dump_dir)
    logging.info(
        "Starting mongodump at %s from %s to %s", format_iso(utc_now()), db_host, dump_dir
    )
    if config.dry_run:
        logging.info("Would run: %s", format_command(command))
        return
    run_command(command, description="mongodump failed")


def archive_location(config: BackupConfig, folder: Optional[str], archive_name: str) -> S3Location:
    parts = [config.prefix.strip("/") if config.prefix else "", folder or "", archive_name]
    return S3Location(bucket=config.bucket, key="/".join(part for part in parts if part))


def create_s3_client(
    *, aws_profile: Optional[str], aws_region: Optional[str]
):
    try:
        import boto3
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "boto3 is required for S3 operations. Install with `pip install boto3`."
        ) from exc
    _quiet_external_loggers()
    session_kwargs = {}
    if aws_profile:
        session_kwargs["profile_name"] = aws_profile
    if aws_region:
        session_kwargs["region_name"] = aws_region
    session = boto3.Session(**session_kwargs)
    return session.client("s3")


def upload_archive(
    config: BackupConfig, scratch_dir: Path, backup_name: str, destination: S3Location
) -> None:
    """Stream ``tar -czf -`` of the dump directory straight into S3."""
    command = ["tar", "-czf", "-", "-C", str(scratch_dir), backup_name]
    logging.info("Archiving backup from %s to %s", scratch_dir / backup_name, destination)

    if config.dry_run:
        logging.info("Would run: %s | upload to %s", format_command(command), destination)
        return

    client = create_s3_client(aws_profile=config.aws_profile, aws_region=config.region)
    try:
        process = subprocess.Popen(command, stdout=subprocess.PIPE)
    except FileNotFoundError as error:
        raise BackupError("archiving failed: tar not found") from error

    try:
        client.upload_fileobj(process.stdout, destination.bucket, destination.key)
    except BaseException:
        process.kill()
        process.wait()
        raise
    finally:
        if process.stdout is not None:
            process.stdout.close()

    returncode = process.wait()
    if returncode != 0:
        raise BackupError(f"archiving failed: tar exited with code {returncode}")


def copy_archive(
    config: BackupConfig, source: S3Location, target: S3Location, *, client=None
) -> None:
    if config.dry_run:
        logging.info("Would copy %s to %s", source, target)
        return
    logging.info("Copying %s to %s", source, target)
    if client is None:
        client = create_s3_client(aws_profile=config.aws_profile, aws_region=config.region)
    client.copy({"Bucket": source.bucket, "Key": source.key}, target.bucket, target.key)


def list_s3_keys(client, bucket: str, prefix: str) -> List[str]:
    paginator = client.get_paginator("list_objects_v2")
    keys: List[str] = []
    for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
        for obj in page.get("Contents", []):
            keys.append(obj["Key"])
    return keys


def select_stale_archives(
    keys: Iterable[str], *, folder_prefix: str, pattern: str, keep: str
) -> List[str]:
    """Keys under ``folder_prefix`` whose relative name matches ``pattern``, except ``keep``."""
    stale: List[str] = []
    for key in keys:
        if not key.startswith(folder_prefix):
            continue
        name = key[len(folder_prefix):]
        if name == keep:
            continue
        if fnmatch.fnmatchcase(name, pattern):
            stale.append(key)
    return stale


def prune_latest(config: BackupConfig, latest: S3Location, archive_name: str, *, client=None) -> List[str]:
    folder_prefix = latest.key[: -len(archive_name)]
    pattern = archive_pattern(config.basename)

    if config.dry_run:
        logging.info(
            "Would delete objects in s3://%s/%s matching %s except %s",
            latest.bucket,
            folder_prefix,
            pattern,
            archive_name,
        )
        return []

    if client is None:
        client = create_s3_client(aws_profile=config.aws_profile, aws_region=config.region)
    stale = select_stale_archives(
        list_s3_keys(client, latest.bucket, folder_prefix),
        folder_prefix=folder_prefix,
        pattern=pattern,
        keep=archive_name,
    )
    for key in stale:
        logging.info("Deleting old backup s3://%s/%s", latest.bucket, key)
        client.delete_object(Bucket=latest.bucket, Key=key)
    return stale


def rotate_archive(
    config: BackupConfig, primary: S3Location, archive_name: str, *, today: datetime
) -> None:
    """Copy the uploaded archive to the weekly, monthly and latest folders when due."""
    client = None
    if not config.dry_run:
        client = create_s3_client(aws_profile=config.aws_profile, aws_region=config.region)

    if is_weekly_due(config.weekly_day, today):
        weekly = archive_location(config, WEEKLY_FOLDER, archive_name)
        copy_archive(config, primary, weekly, client=client)

    if is_monthly_due(config.monthly_day, today):
        monthly = archive_location(config, MONTHLY_FOLDER, archive_name)
        copy_archive(config, primary, monthly, client=client)

    if config.latest:
        latest = archive_location(config, LATEST_FOLDER, archive_name)
        copy_archive(config, primary, latest, client=client)
        prune_latest(config, latest, archive_name, client=client)


def run_backup(
    config: BackupConfig, *, clock: Optional[Callable[[], datetime]] = None
) -> S3Location:
    """Dump, archive, upload and rotate one backup. Returns the primary location."""
    clock = clock or utc_now
    backup_name = make_backup_name(config.basename, clock())
    archive_name = f"{backup_name}{ARCHIVE_SUFFIX}"

    if config.dry_run:
        logging.info("Dry run enabled")

    with tempfile.TemporaryDirectory(prefix=f"{backup_name}.", dir=config.backup_dir) as scratch:
        scratch_dir = Path(scratch)

        db_host = select_dump_host(config) if config.prefer_secondary else config.db_host
        dump_database(config, db_host, scratch_dir / backup_name)

        primary = archive_location(config, DAILY_FOLDER if config.rotate else None, archive_name)
        upload_archive(config, scratch_dir, backup_name, primary)

        if config.rotate:
            # The clock is read again here; a run crossing midnight UTC rotates on the new day.
            rotate_archive(config, primary, archive_name, today=clock())

    logging.info("Done. Completed at %s", format_iso(clock()))
    return primary


def _raise_interrupted(signum: int, _frame: Optional[object]) -> NoReturn:
    raise BackupInterrupted(f"received signal {signum}")


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as error:
        logging.error("%s", error)
        return 1

    try:
        file_config: Optional[Dict[str, str]] = None
        if args.config:
            file_config = read_config_file(args.config)
        config = merge_config(args, file_config)
    except ConfigurationError as error:
        logging.error("%s", error)
        return 1

    previous_handler = signal.signal(signal.SIGTERM, _raise_interrupted)
    try:
        run_backup(config)
    except KeyboardInterrupt:
        logging.error("Backup interrupted")
        return 1
    except Exception as error:  # boto3/botocore errors included
        logging.error("Backup failed: %s", error)
        return 1
    finally:
        signal.signal(signal.SIGTERM, previous_handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())
