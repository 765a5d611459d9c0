"""Tests for the command-line entry point."""

from unittest.mock import patch

import pytest

from game_scheduler import main as cli
from game_scheduler.config import ConfigurationError
from game_scheduler.services.queue_service import TransportConnectionError
from game_scheduler.services.schedule_client import ScheduleFetchError
from game_scheduler.teams import UnknownTeamIdentifier

from helpers import FakeTransport, RecordingNotifier, make_game


def _args(*argv):
    return cli.build_parser().parse_args(list(argv))


class TestBuildRunConfig:
    def test_defaults(self):
        with patch.object(cli, "today_iso", return_value="2025-01-15"):
            config = cli.build_run_config(_args("--local"))

        assert config.date == "2025-01-15"
        assert config.teams == [25]
        assert config.local_mode is True
        assert config.test_mode is False
        assert config.queue_path == "projects/localproject/locations/us-south1/queues/gameschedule"

    def test_explicit_options(self):
        config = cli.build_run_config(_args(
            "--date", "2025-02-01",
            "--teams", "CHI,25",
            "--host", "https://tracker.example.com",
            "--project", "nhl-prod",
            "--location", "us-east1",
            "--queue", "games",
            "--prod",
        ))

        assert config.date == "2025-02-01"
        assert config.teams == [16, 25]
        assert config.host_url == "https://tracker.example.com"
        assert config.queue_path == "projects/nhl-prod/locations/us-east1/queues/games"
        assert config.production is True

    def test_today_overrides_date(self):
        with patch.object(cli, "today_iso", return_value="2025-03-01"):
            config = cli.build_run_config(_args("--local", "--today", "--date", "2024-12-25"))
        assert config.date == "2025-03-01"
        assert config.today is True

    def test_all_teams_overrides_selector(self):
        config = cli.build_run_config(_args("--local", "--all", "--teams", "CHI", "--date", "2025-01-15"))
        assert config.teams == []

    def test_invalid_team_raises(self):
        with pytest.raises(UnknownTeamIdentifier):
            cli.build_run_config(_args("--local", "--teams", "CHI,XXX", "--date", "2025-01-15"))

    def test_local_and_host_are_mutually_exclusive(self):
        with pytest.raises(SystemExit):
            _args("--local", "--host", "https://tracker.example.com")


class TestRunOnce:
    def test_runs_pipeline_end_to_end(self):
        transport = FakeTransport()
        notifier = RecordingNotifier()
        config = cli.build_run_config(_args("--local", "--date", "2025-01-15"))

        with patch.object(cli, "connect_to_tasks_service") as connect, \
                patch.object(cli, "collect_games", return_value=[make_game()]) as collect, \
                patch.object(cli, "create_notification_sender", return_value=notifier):
            connect.return_value.__enter__.return_value = transport
            outcome = cli.run_once(config)

        collect.assert_called_once_with(config)
        assert outcome.tasks_created == 1
        assert len(transport.created) == 1
        assert len(notifier.summaries) == 1

    def test_connection_failure_happens_before_fetch(self):
        config = cli.build_run_config(_args("--local", "--date", "2025-01-15"))

        with patch.object(cli, "connect_to_tasks_service", side_effect=TransportConnectionError("down")), \
                patch.object(cli, "collect_games") as collect, \
                patch.object(cli, "create_notification_sender", return_value=RecordingNotifier()):
            with pytest.raises(TransportConnectionError):
                cli.run_once(config)

        collect.assert_not_called()


class TestMain:
    def test_invalid_team_exits_with_error(self, caplog):
        assert cli.main(["--local", "--teams", "XXX"]) == 1
        assert "invalid team identifier: XXX" in caplog.text

    def test_missing_destination_exits_with_error(self, caplog):
        assert cli.main(["--date", "2025-01-15"]) == 1
        assert "Either --local or --host <url> must be provided" in caplog.text

    def test_invalid_date_exits_with_error(self):
        assert cli.main(["--local", "--date", "2025-02-30"]) == 1

    def test_fetch_failure_exits_with_error(self):
        with patch.object(cli, "run_once", side_effect=ScheduleFetchError("NHL API returned status: 500", 500)):
            assert cli.main(["--local", "--date", "2025-01-15"]) == 1

    def test_successful_run(self):
        with patch.object(cli, "run_once") as run_once:
            assert cli.main(["--local", "--date", "2025-01-15"]) == 0
        assert run_once.call_args.args[0].date == "2025-01-15"

    @pytest.mark.parametrize("cron", ["not a cron", "0 0 5 * * 1", "0 0 5 * * 1 2026"])
    def test_invalid_cron_exits_with_error(self, cron, caplog):
        with patch.object(cli, "GameTaskScheduler") as scheduler:
            assert cli.main(["--local", "--cron", cron]) == 1
        scheduler.assert_not_called()
        assert "Invalid cron expression" in caplog.text

    def test_trigger_rejection_exits_with_error(self):
        with patch.object(cli, "GameTaskScheduler") as scheduler:
            scheduler.return_value.start.side_effect = ConfigurationError("Invalid cron expression '0 5 * * 1'")
            assert cli.main(["--local", "--cron", "0 5 * * 1"]) == 1

    def test_cron_mode_starts_scheduler(self):
        with patch.object(cli, "GameTaskScheduler") as scheduler:
            assert cli.main(["--local", "--cron", "*/15 * * * *"]) == 0

        assert scheduler.call_args.kwargs["cron"] == "*/15 * * * *"
        scheduler.return_value.start.assert_called_once()
