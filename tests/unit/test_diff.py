# tests/unit/test_diff.py
from code_critic.platforms.diff import parse_diff


SAMPLE_DIFF = """--- a/src/main.py
+++ b/src/main.py
@@ -11,4 +11,6 @@ def hello():
     print("hello")
+    print("world")
+    return True
 
 def goodbye():
     pass
"""


def test_parse_diff_extracts_files():
    files = parse_diff(SAMPLE_DIFF)

    assert len(files) == 1
    assert files[0].path == "src/main.py"
    assert files[0].is_new is False


def test_parse_diff_extracts_added_lines():
    files = parse_diff(SAMPLE_DIFF)

    assert files[0].added_lines == [12, 13]
    assert files[0].added_code == '    print("world")\n    return True'


def test_parse_diff_new_file():
    diff = """--- /dev/null
+++ b/new_file.py
@@ -0,0 +1,3 @@
+def new_func():
+    pass
+
"""
    files = parse_diff(diff)

    assert len(files) == 1
    assert files[0].path == "new_file.py"
    assert files[0].is_new is True
    assert files[0].added_code == "def new_func():\n    pass"


def test_parse_diff_deleted_file():
    diff = """--- a/old.py
+++ /dev/null
@@ -1,2 +0,0 @@
-x = 1
-y = 2
"""
    files = parse_diff(diff)

    assert files[0].is_deleted is True
    assert files[0].added_code == ""
