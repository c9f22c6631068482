from clanwars.main import main

raise SystemExit(main())
