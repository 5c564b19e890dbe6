from devreclaim.cli import main

raise SystemExit(main())
