import sys

from account_form.cli import main

sys.exit(main())
