from minitable.cli.main import main

raise SystemExit(main())
