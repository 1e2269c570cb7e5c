import sys

from word_predictor.cli import main

sys.exit(main())
