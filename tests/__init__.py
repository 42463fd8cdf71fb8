import pathlib
import sys

try:
    import symkit
except ImportError:
    # Make 'symkit' importable from a plain checkout by adding the sibling 'src'
    current_dir = pathlib.Path(__file__).resolve().parent
    src_path = current_dir.parent / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))
