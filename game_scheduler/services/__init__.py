"""
Services package for the game task scheduler

This package contains the scheduling pipeline and its collaborators.
"""
from game_scheduler.services.dispatch_service import GameDispatchPipeline, dispatch_games
from game_scheduler.services.game_source import collect_games, create_test_game
from game_scheduler.services.queue_service import CloudTasksTransport, QueueManager, connect_to_tasks_service
from game_scheduler.services.schedule_client import fetch_games_for_date
from game_scheduler.services.task_builder import build_dispatch_task

__all__ = [
    'GameDispatchPipeline',
    'dispatch_games',
    'collect_games',
    'create_test_game',
    'CloudTasksTransport',
    'QueueManager',
    'connect_to_tasks_service',
    'fetch_games_for_date',
    'build_dispatch_task',
]
