"""Default configuration settings for gitver."""

DEFAULT_CONFIG = {
	# Git access configuration
	"git": {
		# Backend to use: 'auto' (command line, then library), 'cli' or 'library'
		"backend": "auto",
		# Remote used to build the project URL
		"remote": "origin",
	},
	# Describe configuration
	"describe": {
		# Glob patterns tags must match
		"match": [],
		# Always use the long <tag>-<count>-g<hash> format
		"long": False,
		# Include lightweight tags
		"tags": False,
	},
	# Changelog configuration
	"changelog": {
		# Commit to start from (mutually exclusive with start_tag)
		"start_commit": "",
		# Tag to start from (mutually exclusive with start_commit)
		"start_tag": "",
		# Emit markdown instead of plain text
		"markdown": False,
		# Project URL used for commit links, derived from the remote when empty
		"project_url": "",
		# Output file, relative to the working directory
		"output_file": "build/changelog.txt",
	},
	# Version string configuration
	"version": {
		# Tag patterns considered when computing versions
		"match": [],
		# Branches whose versions do not get a branch suffix
		"allowed_branches": ["master", "main", "HEAD"],
	},
}
