import sys

from family_agenda.main import main

sys.exit(main())
