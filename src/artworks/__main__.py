from artworks.cli import main

raise SystemExit(main())
