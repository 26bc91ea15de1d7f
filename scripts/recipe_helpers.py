import os

def write(path, contents):
    '''Writes the string `contents` to a file at `path`. Nonexistent directories will be created.'''

    parent_dir = os.path.dirname(path)
    if len(parent_dir) > 0 and not os.path.isdir(parent_dir):
        os.makedirs(parent_dir)

    # newline='' so attribute files get `\n` line endings on every platform
    with open(path, 'w', newline='') as file:
        file.write(contents)

def write_lines(path, *lines):
    '''Writes each of `lines` to the file at `path`, terminating every line with a newline.'''

    write(path, "".join(f"{line}\n" for line in lines))

def append(path, contents):
    '''Appends the string `contents` to the file at `path`.'''

    with open(path, 'a', newline='') as file:
        file.write(contents)

def mkdirs(*paths):
    '''Creates each directory in `paths`, including missing parents.'''

    for path in paths:
        os.makedirs(path, exist_ok=True)
