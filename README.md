# qgit

A small version control system that stores its data the way git does:
zlib-compressed objects addressed by the SHA-1 of `<type> <size>\0<payload>`,
kept under a `.qgit` directory next to your work tree.

## Installation

```
pip install .
```

This installs the `qgit` command.

## Usage

```
qgit <subcommand> [options]
```

Run `qgit --help` (or `qgit -h`) to list every subcommand. Running `qgit`
with no arguments prints the same list and exits with status 1. The
subcommands `init`, `config`, `cat-file` and `hash-object` print their own
help with `-h` / `--help`.

### Create a repository

```
qgit init                     # in the current directory
qgit init path/to/project     # creates the directory if needed
qgit init -b trunk            # choose the initial branch name
qgit init --bare -q           # record bare = true, print nothing
```

`init` creates `.qgit/objects/info`, `.qgit/objects/pack`,
`.qgit/refs/heads`, `.qgit/refs/tags`, a `description` file, a `HEAD` file
pointing at `refs/heads/<branch>` and a `config` file with a `[core]`
section. If no branch is given, `init.defaultBranch` from the global
configuration is used, falling back to `main`. Running `init` where a `.qgit`
directory already exists leaves it untouched and reports that the repository
was reinitialized.

### Store and inspect objects

```
qgit hash-object file.txt            # print the blob id
qgit hash-object -w file.txt         # also write it into the repository
qgit hash-object -t commit raw.txt   # hash as commit, tree, blob or tag

qgit cat-file -t <hash>              # object type
qgit cat-file -s <hash>              # payload size
qgit cat-file -p <hash>              # payload
```

`cat-file` takes only one of `-t`, `-s` and `-p` at a time. Both commands
look for the repository in the current directory and its parents.

### Configuration

Options are named `section.key`. The repository configuration lives in
`.qgit/config`; the global one in `~/.qgitconfig`.

```
qgit config --list
qgit config --set user.name "Jane Doe"
qgit config --global --set user.email jane@example.com
qgit config --get user.name
qgit config --unset user.name
```

Without `--global`, `--set` and `--unset` change the repository
configuration and fail outside a repository. Without `--local` or
`--global`, `--get` looks in the repository configuration first and then the
global one; `--get` exits with status 1 when the key is not set.

## What it does not do

The subcommands `add`, `status`, `commit`, `log`, `check-ignore`,
`checkout`, `ls-files`, `ls-tree`, `rev-parse`, `rm`, `show-ref`, `tag`,
`merge` and `branch` are listed by `qgit --help` but do nothing: they accept
any arguments and exit with status 0. There is no index, so files cannot be
staged, and no way to create commits, branches or tags, move `HEAD`, or
restore files into the work tree. Objects can be hashed, stored and read
back, and commit payloads can be parsed with `Commit.parse`, but nothing
builds trees or commits for you.

## Library use

The building blocks can be imported directly:

- `qgit.compress`: `compress` / `decompress` (zlib, best compression),
  raising `CompressionError`
- `qgit.hashing`: `sha1_hash` / `sha1_hex`
- `qgit.fs`: `mkdirp`
- `qgit.ini`: `IniFile` (`open`, `create`, `parse`, `get`, `set`, `unset`,
  `format`, `print`, `write`, `write_to`), raising `IniError`
- `qgit.options`: `ArgParser`, `Option`, `OptionKind`, `ArgFlag`,
  `Description`, `help_option`, a GNU/POSIX-style option parser
- `qgit.config`: `global_config`, `cwd_config`
- `qgit.repo`: `Repository.create`, `Repository.open`, `Repository.find`,
  `Repository.object_path`
- `qgit.objects`: `GitObject` (`from_file`, `raw`, `hash`, `write`, `read`),
  `ObjectType`, `ObjectError`
- `qgit.commit`: `Commit.parse`
- `qgit.commands`: `cmd_init`, `cmd_config`, `cmd_cat_file`,
  `cmd_hash_object`, raising `CommandError`
- `qgit.cli`: `main`, `run_command`, `show_commands`

## Running the tests

```
pip install .[test]
pytest
```