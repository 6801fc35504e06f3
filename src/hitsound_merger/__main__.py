from hitsound_merger.cli import main

raise SystemExit(main())
