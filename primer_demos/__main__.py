from primer_demos.cli import main

raise SystemExit(main())
