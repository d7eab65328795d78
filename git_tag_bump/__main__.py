from git_tag_bump.cli import main

raise SystemExit(main())
