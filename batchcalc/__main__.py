from batchcalc.app.cli import main

raise SystemExit(main())
