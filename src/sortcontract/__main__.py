import sys

from sortcontract import main

sys.exit(main())
