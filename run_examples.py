import glob
import subprocess
import sys
import os

cwd = os.path.abspath(os.path.dirname(__file__))
pattern = os.path.join(cwd, 'examples', '*.py')
files = sorted(glob.glob(pattern))
env = os.environ.copy()
env['PYTHONPATH'] = cwd + os.pathsep + env.get('PYTHONPATH', '')
print(f'Found {len(files)} example scripts')
failed = 0
for f in files:
    print('=== Running:', os.path.relpath(f, cwd))
    r = subprocess.run([sys.executable, f], cwd=cwd, env=env)
    if r.returncode != 0:
        failed += 1
        print('*** Exit code:', r.returncode)
print('Done' if not failed else f'Done, {failed} failed')
sys.exit(1 if failed else 0)
