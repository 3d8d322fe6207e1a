"""Git hosting providers: detection and parsing of GitHub, GitLab, Bitbucket and generic URLs."""