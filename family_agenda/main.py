#!/usr/bin/env python3
"""
family-agenda - recurring family reminders on the command line.

Reads the reminder store, resolves which reminders occur on which days and
prints the agenda, calendar and list views.
"""

import argparse
import logging
import sys

from family_agenda.core.config import load_config, get_default_config_path
from family_agenda.commands import (
    AgendaCommand,
    CalendarCommand,
    ListCommand,
    DuplicatesCommand,
    AddCommand,
    AssignCommand,
    AcknowledgeCommand,
    DeleteCommand
)

AUDIENCE_CHOICES = ['ELDER', 'FAMILY']
RECURRENCE_CHOICES = ['NONE', 'DAILY', 'WEEKLY', 'MONTHLY']


def _upper(value: str) -> str:
    return value.upper()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='family-agenda',
        description="Family reminders resolved into agenda and calendar views",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  family-agenda agenda                        # Today, tomorrow and the rest of the week
  family-agenda agenda --date 2024-06-10      # Agenda as seen on another day
  family-agenda calendar --month 2024-06      # Month grid
  family-agenda list --audience FAMILY        # Family reminder list
  family-agenda add "Pharmacy" --date 2024-06-10 --time 09:30 --recurrence WEEKLY \\
      --audience ELDER --audience FAMILY --family fam-1
  family-agenda delete <id> --all             # Delete every occurrence
        """
    )

    default_config = get_default_config_path()

    parser.add_argument(
        '--config',
        help=f'Path to configuration file (default: {default_config})',
        default=None
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output'
    )
    # Family scope shared by the read-only views
    scope_parser = argparse.ArgumentParser(add_help=False)
    scope_parser.add_argument(
        '--family',
        dest='family_id',
        help='Family scope (default: configured default_family_id, else every family)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Agenda command
    agenda_parser = subparsers.add_parser('agenda', parents=[scope_parser], help='Show today, tomorrow and upcoming reminders')
    agenda_parser.add_argument('--date', help='Reference date (YYYY-MM-DD, default: today)')
    agenda_parser.add_argument('--audience', type=_upper, choices=AUDIENCE_CHOICES,
                               help='Audience to show (default from config)')
    agenda_parser.add_argument('--ids', action='store_true', help='Show reminder ids')

    # Calendar command
    calendar_parser = subparsers.add_parser('calendar', parents=[scope_parser], help='Show a month of reminder occurrences')
    calendar_parser.add_argument('--month', help='Month to show (YYYY-MM, default: current month)')
    calendar_parser.add_argument('--audience', type=_upper, choices=AUDIENCE_CHOICES,
                                 help='Restrict to one audience (default: all)')
    calendar_parser.add_argument('--all-days', action='store_true', help='Also print days without reminders')

    # List command
    list_parser = subparsers.add_parser('list', parents=[scope_parser], help='List reminders without duplicates')
    list_parser.add_argument('--audience', type=_upper, choices=AUDIENCE_CHOICES,
                             help='Audience to list (default: FAMILY)')

    # Duplicates command
    dup_parser = subparsers.add_parser('duplicates', parents=[scope_parser], help='Report duplicate reminders')
    dup_parser.add_argument('--key', choices=['exact', 'recurrence'],
                            help='Duplicate key (default from config)')

    # Add command
    add_parser = subparsers.add_parser('add', help='Create a reminder')
    add_parser.add_argument('description', help='Reminder text')
    add_parser.add_argument('--date', required=True, help='Start date (YYYY-MM-DD)')
    add_parser.add_argument('--time', help='Time of day (HH:MM); omit for all day')
    add_parser.add_argument('--recurrence', type=_upper, choices=RECURRENCE_CHOICES, default='NONE',
                            help='Recurrence type')
    add_parser.add_argument('--recurrence-day', type=int,
                            help='Day of month for MONTHLY reminders (1-31)')
    add_parser.add_argument('--audience', dest='audiences', action='append', type=_upper,
                            choices=AUDIENCE_CHOICES,
                            help='Target audience; repeat for several (default from config)')
    add_parser.add_argument('--family', dest='family_ids', action='append',
                            help='Family to create the reminder in; repeat for several')
    add_parser.add_argument('--by', dest='created_by', help='Id of the creating user')

    # Assign command
    assign_parser = subparsers.add_parser('assign', help="Assign a reminder to someone")
    assign_parser.add_argument('reminder_id')
    assign_parser.add_argument('person_id')

    # Acknowledge command
    ack_parser = subparsers.add_parser('ack', help='Acknowledge a reminder')
    ack_parser.add_argument('reminder_id')

    # Delete command
    delete_parser = subparsers.add_parser('delete', help='Delete a reminder')
    delete_parser.add_argument('reminder_id')
    delete_parser.add_argument('--all', dest='all_occurrences', action='store_true',
                               help='Delete every occurrence of a recurring reminder')

    return parser


def main(argv=None):
    """Main entry point for family-agenda."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging if verbose mode is enabled
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    # Show help if no command specified
    if not args.command:
        parser.print_help()
        return 1

    config = load_config(args.config)

    if args.verbose:
        actual_config_path = args.config if args.config else get_default_config_path()
        print(f"Using config: {actual_config_path}")
        print(f"Using store: {config.store_path}")

    try:
        if args.command == 'agenda':
            cmd = AgendaCommand(config, verbose=args.verbose)
            success = cmd.run(date_str=args.date, audience=args.audience,
                              family_id=args.family_id, show_ids=args.ids)

        elif args.command == 'calendar':
            cmd = CalendarCommand(config, verbose=args.verbose)
            success = cmd.run(month_str=args.month, audience=args.audience,
                              family_id=args.family_id, show_empty=args.all_days)

        elif args.command == 'list':
            cmd = ListCommand(config, verbose=args.verbose)
            success = cmd.run(audience=args.audience, family_id=args.family_id)

        elif args.command == 'duplicates':
            cmd = DuplicatesCommand(config, verbose=args.verbose)
            success = cmd.run(key_name=args.key, family_id=args.family_id)

        elif args.command == 'add':
            cmd = AddCommand(config, verbose=args.verbose)
            success = cmd.run(
                description=args.description,
                date_str=args.date,
                time_str=args.time,
                recurrence=args.recurrence,
                recurrence_day=args.recurrence_day,
                audiences=args.audiences,
                family_ids=args.family_ids,
                created_by=args.created_by,
            )

        elif args.command == 'assign':
            cmd = AssignCommand(config, verbose=args.verbose)
            success = cmd.run(args.reminder_id, args.person_id)

        elif args.command == 'ack':
            cmd = AcknowledgeCommand(config, verbose=args.verbose)
            success = cmd.run(args.reminder_id)

        elif args.command == 'delete':
            cmd = DeleteCommand(config, verbose=args.verbose)
            success = cmd.run(args.reminder_id, all_occurrences=args.all_occurrences)

        else:
            print(f"Unknown command '{args.command}'.")
            return 1

        return 0 if success else 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 130
    except Exception as e:
        print(f"Error: {e}")
        if not args.verbose:
            print("Re-run with --verbose for more detail.")
        else:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
