import os
import importlib.util
import logging
import shlex
import shutil
import stat
import sys

from commands import exec_append_to_file, exec_redirect_to_log, git_env
import recipe_helpers

logger = logging.getLogger(__name__)

RECIPES_DIR = os.path.join(os.path.dirname(__file__), "recipes")
BASELINE_FILE = "baseline"

def has_callable(obj, attr):
    '''Returns `True` if `obj` has a callable attribute `attr`.'''

    return hasattr(obj, attr) and callable(getattr(obj, attr))

def recipe_names():
    '''Returns the names of all recipes in the recipes directory, sorted.'''

    names = []
    for entry_name in os.listdir(RECIPES_DIR):
        name, ext = os.path.splitext(entry_name)
        if os.path.isfile(os.path.join(RECIPES_DIR, entry_name)) and ext == ".py":
            names.append(name)
    return sorted(names)

def import_recipe(name):
    '''Imports and validates the recipe from recipes/`name`.py.'''

    recipe_path = os.path.join(RECIPES_DIR, f"{name}.py")
    logger.debug(f"importing recipe from `{recipe_path}`")

    if not os.path.isfile(recipe_path):
        logger.warning(f"no such recipe: `{recipe_path}`")
        return None

    spec = importlib.util.spec_from_file_location(f"recipes.{name}", recipe_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)

    if has_callable(module, 'setup') and has_callable(module, 'run_git'):
        return module
    else:
        logger.warning(f"invalid recipe: `{recipe_path}`")
        return None

def delete_readonly(function, path, excinfo):
    os.chmod(path, stat.S_IWRITE)
    os.remove(path)

def remove_path(path):
    '''Removes the file or directory at `path`, including read-only git objects.'''

    path = os.path.abspath(path)

    if os.path.isdir(path):
        logger.info(f"removing directory `{path}`")
        shutil.rmtree(path, onerror=delete_readonly)
    elif os.path.isfile(path):
        logger.info(f"removing file `{path}`")
        os.remove(path)

def make_baseline(attributes_file, env):
    '''Returns a function that records the `check-attr` output for one path into the baseline log.'''

    def baseline(path):
        logger.debug(f"recording baseline for `{path}`")
        recipe_helpers.append(BASELINE_FILE, f"{path}\n")
        command = ["git", "-c", f"core.attributesFile={attributes_file}", "check-attr", "-a", path]
        exec_append_to_file(command, BASELINE_FILE, env=env)
        recipe_helpers.append(BASELINE_FILE, "\n")

    return baseline

def generate_all_fixtures(force):
    '''Generates a fixture from each recipe in the recipes directory.
    If `force` is `True`, existing fixtures will be regenerated.'''

    logger.info("generating all fixtures")
    generate_fixtures(recipe_names(), force)

def generate_fixtures(names, force):
    '''Generates a fixture from each recipe specified in `names`.
    If `force` is `True`, existing fixtures will be regenerated.'''

    for name in names:
        generate_fixture(name, force)

def generate_fixture(name, force=False):
    '''Generates the fixture described by the recipe called `name` in the current directory.
    Returns the absolute path of the workspace, or `None` if the recipe is invalid.

    Unless `force` is `True`, an existing workspace makes this raise `FileExistsError`.
    A failing command raises `subprocess.CalledProcessError`; partial output is left in place.'''

    recipe = import_recipe(name)
    if recipe is None:
        return None

    workspace = os.path.abspath(getattr(recipe, 'WORKSPACE', name))
    attributes_file = getattr(recipe, 'ATTRIBUTES_FILE', 'user.attributes')

    print("{:=^80s}".format(f" {name} "))
    logger.info(f"generating fixture `{name}` in `{workspace}`...")

    if force:
        remove_path(workspace)
    os.mkdir(workspace)

    env = git_env()
    call_git = lambda command: exec_redirect_to_log(["git"] + shlex.split(command), logger, logging.DEBUG, env=env)

    current_dir = os.getcwd()
    os.chdir(workspace)
    try:
        recipe.setup(recipe_helpers, call_git)
        logger.debug("done with setup, recording baseline...")
        recipe.run_git(make_baseline(attributes_file, env))
    finally:
        os.chdir(current_dir)

    logger.info(f"done generating fixture `{name}`")
    return workspace
