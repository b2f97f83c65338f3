import unittest

from commit_crafter.vcs.errors import ErrorKind, classify_error


class TestClassifyError(unittest.TestCase):
    def test_auth_required(self) -> None:
        self.assertIs(classify_error("svn: E170013: Unable to connect to a repository at URL"), ErrorKind.AUTH_REQUIRED)
        self.assertIs(
            classify_error("svn: E215004: Authentication failed and interactive prompting is disabled; see the --force-interactive option"),
            ErrorKind.AUTH_REQUIRED,
        )
        self.assertIs(classify_error("svn: E215004: Can't get password"), ErrorKind.AUTH_REQUIRED)
        self.assertIs(classify_error("svn: E215004: 无法取得密码"), ErrorKind.AUTH_REQUIRED)

    def test_nothing_to_commit(self) -> None:
        self.assertIs(classify_error("On branch main\nnothing to commit, working tree clean"), ErrorKind.NOTHING_TO_COMMIT)
        self.assertIs(classify_error("无文件要提交，干净的工作区"), ErrorKind.NOTHING_TO_COMMIT)

    def test_case_insensitive(self) -> None:
        self.assertIs(classify_error("UNABLE TO CONNECT"), ErrorKind.AUTH_REQUIRED)

    def test_unknown(self) -> None:
        # The server refusing access is not fixed by typing a password
        self.assertIs(classify_error("svn: E170001: Authorization failed"), ErrorKind.UNKNOWN)
        self.assertIs(classify_error("svn: E155011: File is out of date"), ErrorKind.UNKNOWN)
        self.assertIs(classify_error(""), ErrorKind.UNKNOWN)


if __name__ == "__main__":
    unittest.main()
