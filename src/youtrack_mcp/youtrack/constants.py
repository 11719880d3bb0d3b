"""Field projections and fixed values used against the YouTrack REST API."""

ISSUE_DETAIL_FIELDS = (
    "id,idReadable,summary,description,created,updated,resolved,"
    "project(id,name,shortName),reporter(id,login,fullName),"
    "customFields(name,value(name,login,fullName,presentation,minutes,text)),"
    "tags(name)"
)
ISSUE_SEARCH_FIELDS = (
    "id,idReadable,summary,description,created,updated,resolved,"
    "project(shortName),customFields(name,value(name,login,fullName,presentation))"
)
ISSUE_REFRESH_FIELDS = (
    "id,idReadable,summary,description,"
    "customFields(name,value(name,login,fullName,presentation,minutes)),"
    "project(shortName),tags(name)"
)
ISSUE_CREATED_FIELDS = "id,idReadable,summary,$type"
ISSUE_CUSTOM_FIELD_IDS = "customFields(id,name,projectCustomField(id))"

COMMENT_FIELDS = "id,text,author(id,login,fullName),created,updated"
LINK_FIELDS = (
    "id,direction,linkType(name,sourceToTarget,targetToSource,directed),"
    "issues(id,idReadable,summary)"
)
WATCHER_FIELDS = "hasStar,issueWatchers(user(id,login,fullName,email))"

PROJECT_FIELDS = "id,name,shortName,description,archived,leader(login,fullName)"
PROJECT_CUSTOM_FIELDS = (
    "id,canBeEmpty,field(id,name,localizedName,fieldType(valueType)),"
    "bundle($type,id,values(name,localizedName,description,ordinal,isResolved,"
    "color(background,foreground)))"
)
MOVED_ISSUE_FIELDS = "id,idReadable,summary,project(id,name,shortName)"

USER_FIELDS = "id,login,fullName,email"

BOARD_FIELDS = "id,name,projects(shortName,name),currentSprint(id,name)"
BOARD_DETAIL_FIELDS = (
    "id,name,projects(shortName,name),currentSprint(id,name),"
    "sprints(id,name,start,finish,archived,isDefault,goal),"
    "columnSettings(columns(presentation))"
)
SPRINT_FIELDS = "id,name,goal,start,finish,archived,isDefault"
SPRINT_DETAIL_FIELDS = f"{SPRINT_FIELDS},issues(id)"

WORK_ITEM_FIELDS = (
    "id,date,text,duration(minutes,presentation),author(id,login,fullName),"
    "type(name),issue(idReadable)"
)

ARTICLE_FIELDS = (
    "id,idReadable,summary,description,updated,project(shortName,name),"
    "parentArticle(id,idReadable),childArticles(id,idReadable)"
)
ARTICLE_DETAIL_FIELDS = f"{ARTICLE_FIELDS},content"

COMMAND_SUGGESTION_FIELDS = (
    "query,caret,suggestions(option,description,prefix,suffix,completionStart,"
    "completionEnd),commands(description,error)"
)

INTERNAL_PROJECT_ID_PATTERN = r"^\d+-\d+$"

COMPLETE_STATE = "Fixed"
IN_PROGRESS_STATE = "In Progress"

QUERY_EXAMPLES = (
    'Example queries: "project: MYPROJECT", "state: Open assignee: me", "#Bug"'
)
