import os
import subprocess

# Keeps git output independent of the user's configuration and the clock.
GIT_ENV = {
    "GIT_CONFIG_NOSYSTEM": "1",
    "GIT_CONFIG_GLOBAL": os.devnull,
    "GIT_CONFIG_COUNT": "1",
    "GIT_CONFIG_KEY_0": "init.defaultBranch",
    "GIT_CONFIG_VALUE_0": "main",
    "GIT_AUTHOR_NAME": "author",
    "GIT_AUTHOR_EMAIL": "author@example.com",
    "GIT_AUTHOR_DATE": "2000-01-01 00:00:00 +0000",
    "GIT_COMMITTER_NAME": "committer",
    "GIT_COMMITTER_EMAIL": "committer@example.com",
    "GIT_COMMITTER_DATE": "2000-01-02 00:00:00 +0000",
}

def git_env():
    '''Returns a copy of the current environment with `GIT_ENV` applied.'''

    env = dict(os.environ)
    env.pop("GIT_DIR", None)
    env.update(GIT_ENV)
    return env

def exec_redirect_to_log(command, logger, level, env=None):
    '''Executes the provided `command` (a list of arguments), redirecting stdout and stderr
    to `logger` with the specified level.

    Raises `subprocess.CalledProcessError` if the command exits with a non-zero status.'''

    logger.log(level, f"executing subprocess `{command}`:")
    logger.log(level, "{:-^80s}".format(" begin subprocess output "))

    process = subprocess.Popen(command, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, env=env)
    with process.stdout as stdout:
        for line in iter(stdout.readline, b''):
            logger.log(level, line.decode(errors='replace').rstrip('\n'))

    logger.log(level, "{:-^80s}".format(" end subprocess output "))

    return_code = process.wait()
    if return_code:
        raise subprocess.CalledProcessError(return_code, command)

def exec_append_to_file(command, path, env=None):
    '''Executes the provided `command`, appending its stdout to the file at `path`.
    stderr is left attached to the terminal.

    Raises `subprocess.CalledProcessError` if the command exits with a non-zero status.'''

    with open(path, 'ab') as output_file:
        subprocess.run(command, stdout=output_file, env=env, check=True)
